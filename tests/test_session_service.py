from __future__ import annotations

import sys
from pathlib import Path

# Make the catalog package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.domain.document import seed_document  # noqa: E402
from catalog.services.session_service import SessionManager  # noqa: E402


def test_login_get_logout_cycle():
    admin, agent = seed_document().users
    sessions = SessionManager()
    assert sessions.get(None) is None

    admin_token = sessions.login(admin)
    agent_token = sessions.login(agent)
    assert admin_token != agent_token

    current = sessions.get(admin_token)
    assert current.role == "admin"
    assert current.is_admin
    assert current.name == "Admin"
    assert not sessions.get(agent_token).is_admin

    sessions.logout(admin_token)
    assert sessions.get(admin_token) is None
    assert sessions.get(agent_token) is not None
    sessions.logout(admin_token)
    sessions.logout(None)
