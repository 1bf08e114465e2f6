import os

import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]

# bcrypt ships a compiled extension that must match the interpreter.
_C_EXT_PACKAGES = ["bcrypt"]


def _install(session: nox.Session) -> None:
    """Install the project with all extras into the nox virtualenv."""
    session.run(
        "poetry",
        "install",
        "--all-extras",
        external=True,
    )
    # Force-rebuild C-extension packages so the .so matches this Python version.
    session.run(
        "pip",
        "install",
        "--force-reinstall",
        "--no-cache-dir",
        *_C_EXT_PACKAGES,
    )


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest")


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no infrastructure required)."""
    _install(session)
    session.run(
        "pytest",
        "tests/identity/domain/",
        "tests/catalogue/domain/",
        "tests/ordering/domain/",
    )


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_workflow(session: nox.Session) -> None:
    """Run the order workflow suites: application tests and BDD scenarios."""
    _install(session)
    session.run("pytest", "tests/ordering/application/", "tests/ordering/bdd/", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def loadtest_smoke(session: nox.Session) -> None:
    """Short headless Locust run against a server at STOREFRONT_URL."""
    _install(session)
    host = os.environ.get("STOREFRONT_URL", "http://localhost:8000")
    session.run(
        "locust",
        "-f",
        "loadtests/locustfile.py",
        "BrowsingUser",
        "ShopperUser",
        "--headless",
        "-u",
        "10",
        "-r",
        "2",
        "-t",
        "60s",
        "--host",
        host,
    )
