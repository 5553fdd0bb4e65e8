import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "unit", "integration"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "DATABASE_URL",
    "AUTH_JWT_SECRET",
    "TIMEZONE",
    "ENVIRONMENT",
]


def _set_env(session):
    """
    Propagate database and test-related environment variables into the session.
    Also ensure the project root is on PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting, linting, and type-checks:
      - isort
      - black
      - flake8
      - mypy
    """
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "rollcall/", "tests/")
    session.run("black", "rollcall/", "tests/")
    session.run("flake8", "rollcall/", "tests/")
    session.run("mypy", "rollcall/")


@nox.session(name="unit")
def unit(session):
    """
    Run unit tests (services, core helpers, presenter) on SQLite.
    Pass positional args to target specific tests.
    Usage:
      nox -s unit             # runs all tests under tests/unit
      nox -s unit -- tests/unit/test_services/test_checkin.py
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/unit"]
    htmlcov_path = ".nox/htmlcov"
    session.run(
        "pytest",
        *tests,
        "--maxfail=1",
        "-vv",
        "--tb=short",
        "--cov=rollcall",
        "--cov-report=term-missing",
        "--cov-report=html:" + htmlcov_path,
        "--cov-report=xml",
    )


@nox.session(name="integration")
def integration(session):
    """
    Run HTTP-level tests through the FastAPI TestClient.
    Usage:
      nox -s integration
      nox -s integration -- tests/integration/test_api/test_checkins.py
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/integration"]
    session.run(
        "pytest",
        *tests,
        "--maxfail=1",
        "-vv",
        "--tb=short",
    )
