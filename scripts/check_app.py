import pathlib
import sys


def ensure_project_path() -> None:
    """Make sure the project root is on sys.path for local module imports."""
    project_root = pathlib.Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


if __name__ == "__main__":
    ensure_project_path()

    from programming_helper.main import app  # noqa: E402

    gateway = app.state.gateway
    print("FastAPI app imported successfully with", len(app.routes), "routes.")
    print("Model:", gateway.model_name if gateway.is_available() else "unavailable (no API key)")
