from dotenv import load_dotenv
load_dotenv()

from app import create_app
from app.extensions import db

app = create_app()


@app.cli.command("init-db")
def init_db():
    """Create all tables without running migrations."""
    db.create_all()
    print("Database tables created.")


if __name__ == "__main__":
    app.run(debug=True)
