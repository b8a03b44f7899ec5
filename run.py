import os

from sexed.app import create_app

# ================= APP =================
app = create_app()

print("✅ Sexual health education API configured")
print(f"📦 Routes registered: {len(list(app.url_map.iter_rules()))}")

# ================= PRODUCTION READY =================
# Gunicorn serves this app in production:
#   gunicorn run:app
#
# For local development:
#   flask --app run run --host=0.0.0.0 --port=5000

if __name__ == "__main__":
    app.run(
        host="0.0.0.0",
        port=int(os.getenv("PORT", "5000")),
        debug=os.getenv("FLASK_DEBUG") == "1",
    )
