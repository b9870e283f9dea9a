"""
WSGI entry point (e.g. gunicorn wsgi:app)
"""
from main import app

if __name__ == "__main__":
    app.run()
