"""
Streamlit tests for the dashboard flow: landing, auth form, login and sign out.
"""

import pytest
from streamlit.testing.v1 import AppTest


def run_dashboard():
    from pharmaventory.dashboard import main
    main()


def click(at: AppTest, label: str) -> AppTest:
    next(b for b in at.button if b.label == label).click()
    return at.run()


def fill(at: AppTest, label: str, value: str) -> None:
    next(t for t in at.text_input if t.label == label).input(value)


def login(at: AppTest, email: str, password: str) -> AppTest:
    click(at, "Get Started")
    fill(at, "Email", email)
    fill(at, "Password", password)
    return click(at, "Login")


@pytest.fixture
def app(manager) -> AppTest:
    at = AppTest.from_function(run_dashboard, default_timeout=30)
    at.session_state["auth_manager"] = manager
    return at.run()


def test_landing_page_shows_get_started(app):
    assert not app.exception
    assert [b.label for b in app.button] == ["Get Started", "Sign up"]
    assert len(app.text_input) == 0


def test_get_started_opens_login_form_in_one_click(app):
    click(app, "Get Started")

    assert not app.exception
    assert [t.label for t in app.text_input] == ["Email", "Password"]


def test_sign_up_opens_register_form_in_one_click(app):
    click(app, "Sign up")

    assert [t.label for t in app.text_input] == ["Full name", "Email", "Password"]
    assert len(app.selectbox) == 1


def test_login_failure_shows_error(http, app):
    http.add("POST", "/api/auth/login", status=401, body={"detail": "Invalid credentials"})

    login(app, "ada@example.com", "wrong")

    assert not app.exception
    assert any("Invalid credentials" in e.value for e in app.error)
    assert [t.label for t in app.text_input] == ["Email", "Password"]


def test_login_success_shows_sidebar_and_greeting(backend, app, manager):
    login(app, "ada@example.com", "secret")

    assert not app.exception
    assert manager.token == "t1"
    assert any("Logged in successfully" in s.value for s in app.success)
    assert any("Hey, Ada" in m.value for m in app.markdown)
    assert any(b.label == "🚪 Sign out" for b in app.sidebar.button)


def test_sign_out_returns_to_landing(backend, app, manager):
    login(app, "ada@example.com", "secret")

    click(app, "🚪 Sign out")

    assert not app.exception
    assert not manager.authenticated
    assert any("You have signed out." in s.value for s in app.success)
    assert any(b.label == "Get Started" for b in app.button)
    assert len(app.text_input) == 0
