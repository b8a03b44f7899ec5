"""
FAQ matcher behind the chatbot.

Matching is plain keyword containment over the lower-cased input; the first
FAQ (in list order) with any keyword present wins.
"""
from collections import namedtuple

FAQ = namedtuple("FAQ", ["question", "answer", "keywords"])

FALLBACK_ANSWER = (
    "I understand you're asking about this topic. For specific medical questions "
    "or detailed personalized information, I recommend posting in our anonymous "
    "Q&A Forum where healthcare professionals can provide comprehensive responses "
    "tailored to your situation."
)

GREETING = (
    "Hello! I'm your Sexual Health Education assistant. Browse our frequently "
    "asked questions below or ask your own question. For detailed medical advice, "
    "visit our Q&A Forum."
)

FAQS = [
    FAQ(
        "What types of contraception are available?",
        "There are many types of contraception available including condoms, birth "
        "control pills, IUDs, implants, patches, and emergency contraception. Each has "
        "different effectiveness rates, side effects, and methods of use. Condoms are "
        "the only method that also protects against STIs. For personalized advice, "
        "please consult with a healthcare professional.",
        ("contraception", "birth control", "condom", "pill", "iud"),
    ),
    FAQ(
        "How can I prevent STIs?",
        "STIs (Sexually Transmitted Infections) can be prevented through: 1) Using "
        "condoms consistently and correctly, 2) Getting regular STI testing, 3) Open "
        "communication with partners about sexual health, 4) Limiting number of sexual "
        "partners, 5) Getting vaccinated (HPV, Hepatitis B). Common STIs include "
        "chlamydia, gonorrhea, herpes, HPV, and HIV.",
        ("sti", "std", "infection", "disease", "prevention"),
    ),
    FAQ(
        "How often should I get tested for STIs?",
        "Regular STI testing is important for sexually active individuals. The CDC "
        "recommends at least annual testing for sexually active people. If you have "
        "multiple partners or engage in high-risk behavior, testing every 3-6 months is "
        "recommended. Tests can be done at healthcare clinics, student health centers, "
        "or through at-home testing kits.",
        ("testing", "test", "screening", "check"),
    ),
    FAQ(
        "What should I do if I think I'm pregnant?",
        "If you think you might be pregnant: 1) Take a home pregnancy test (most "
        "accurate 1 week after missed period), 2) Schedule an appointment with a "
        "healthcare provider, 3) Discuss your options and next steps. Healthcare "
        "providers can provide counseling, prenatal care, or information about all "
        "available options.",
        ("pregnancy", "pregnant", "test"),
    ),
    FAQ(
        "What is consent?",
        "Consent is freely given, enthusiastic agreement to participate in sexual "
        "activity. Key points: 1) It must be clear and ongoing, 2) It can be withdrawn "
        "at any time, 3) It cannot be given if someone is intoxicated, unconscious, or "
        "coerced, 4) Silence or lack of resistance is NOT consent, 5) Past consent "
        "doesn't mean future consent.",
        ("consent", "permission", "agreement"),
    ),
    FAQ(
        "Where can I find more resources?",
        "You can find additional resources in our Resources section, including links "
        "to local health services, educational materials, support groups, and "
        "counseling services. You can also post questions anonymously in our Q&A Forum "
        "where healthcare professionals provide personalized responses.",
        ("resources", "help", "support", "services"),
    ),
    FAQ(
        "What are the signs of common STIs?",
        "Common STI symptoms include unusual discharge, burning during urination, sores "
        "or bumps, itching, and pain during sex. However, many STIs have NO symptoms, "
        "which is why regular testing is crucial. If you notice any symptoms or had "
        "unprotected sex, get tested immediately.",
        ("symptoms", "signs", "discharge", "burning"),
    ),
    FAQ(
        "Is emergency contraception safe?",
        "Yes, emergency contraception (like Plan B) is safe and effective when taken "
        "within 72 hours of unprotected sex. The sooner you take it, the more effective "
        "it is. It's available over-the-counter at pharmacies. It's not the same as the "
        "abortion pill and won't harm an existing pregnancy.",
        ("emergency", "plan b", "morning after"),
    ),
]


def match_faq(text, faqs=FAQS):
    """Return the first FAQ with a keyword contained in ``text``, else ``None``."""
    lowered = (text or "").lower()
    for faq in faqs:
        if any(keyword in lowered for keyword in faq.keywords):
            return faq
    return None
