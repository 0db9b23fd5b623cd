from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()

from farmledger import create_app  # noqa: E402

app = create_app(os.getenv("CONFIG_CLASS", "farmledger.config.DevelopmentConfig"))

if __name__ == "__main__":
    port = int(os.getenv("PORT", 8000))  # Default to 8000 if not in .env
    with app.app_context():
        from farmledger.extensions import db
        db.create_all()
    app.run(host="0.0.0.0", port=port, debug=app.config.get("FLASK_DEBUG", False))
