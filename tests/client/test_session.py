import json
import os
import stat

import pytest

from client.session import ClientSession


def test_session_starts_empty_without_stored_file(tmp_path) -> None:
    session = ClientSession(tmp_path / 'session.json')

    assert session.is_authenticated is False
    assert session.auth_headers() == {}


def test_login_persists_and_is_restored_on_next_start(tmp_path) -> None:
    path = tmp_path / 'nested' / 'session.json'
    ClientSession(path).login('token-123', 'alice')

    restored = ClientSession(path)

    assert restored.is_authenticated is True
    assert restored.username == 'alice'
    assert restored.auth_headers() == {'Authorization': 'Bearer token-123'}


def test_logout_clears_memory_and_storage(tmp_path) -> None:
    path = tmp_path / 'session.json'
    session = ClientSession(path)
    session.login('token-123', 'alice')

    session.logout()

    assert session.is_authenticated is False
    assert session.username is None
    assert not path.exists()
    assert ClientSession(path).is_authenticated is False


def test_unreadable_session_file_is_ignored(tmp_path) -> None:
    path = tmp_path / 'session.json'
    path.write_text('{not json', encoding='utf-8')

    assert ClientSession(path).is_authenticated is False


def test_session_file_without_token_is_ignored(tmp_path) -> None:
    path = tmp_path / 'session.json'
    path.write_text(json.dumps({'username': 'alice'}), encoding='utf-8')

    assert ClientSession(path).is_authenticated is False


@pytest.mark.skipif(os.name == 'nt', reason='POSIX permission bits')
def test_stored_session_is_readable_by_owner_only(tmp_path) -> None:
    path = tmp_path / 'session.json'
    path.write_text('{}', encoding='utf-8')
    path.chmod(0o644)

    ClientSession(path).login('token-123', 'alice')

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert json.loads(path.read_text(encoding='utf-8'))['token'] == 'token-123'
