"""Development entry point: `python app.py` (settings picked by APP_ENV)."""

from src.factory_worklog.factory_worklog.main import run

if __name__ == "__main__":
    run()
