"""Development entry point: ``python app.py`` (APP_ENV selects settings)."""
from src.training_attendance.training_attendance.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(app.config.get("PORT", 5000)), debug=bool(app.config.get("DEBUG")))
