import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from prometheus_client import REGISTRY
from friendapp import crud
from friendapp.main import app
from friendapp.models.friendships import FriendshipStatus

ALICE, BOB = 1, 2


@pytest_asyncio.fixture
async def failing_client(db):
    # surface unhandled errors as 500 responses instead of raising in the test
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


async def store_down(*args, **kwargs):
    raise RuntimeError('store went away')


def error_count(action):
    value = REGISTRY.get_sample_value(
        'friendship_mutations_total', {'action': action, 'outcome': 'error'}
    )
    return value or 0.0


@pytest.mark.asyncio
async def test_send_store_failure_is_500(failing_client, headers, monkeypatch):
    before = error_count('send')
    monkeypatch.setattr(crud, '_get_status', store_down)

    res = await failing_client.post(
        '/api/friendship-requests/send', json={'friendUserId': BOB}, headers=headers(ALICE)
    )
    assert res.status_code == 500
    assert res.text != '{"ok":true}'
    assert error_count('send') == before + 1

    monkeypatch.undo()
    assert await crud.get_friendship(ALICE, BOB) is None


@pytest.mark.asyncio
async def test_decline_store_failure_is_500(failing_client, headers, monkeypatch):
    await crud.send_friendship_request(ALICE, BOB)
    before = error_count('decline')
    monkeypatch.setattr(crud, '_set_status', store_down)

    res = await failing_client.post(
        '/api/friendship-requests/decline', json={'friendUserId': ALICE}, headers=headers(BOB)
    )
    assert res.status_code == 500
    assert error_count('decline') == before + 1

    monkeypatch.undo()
    row = await crud.get_friendship(ALICE, BOB)
    assert row.status == FriendshipStatus.requested.value


@pytest.mark.asyncio
async def test_decline_store_failure_propagates(db, monkeypatch):
    await crud.send_friendship_request(ALICE, BOB)
    monkeypatch.setattr(crud, '_set_status', store_down)
    with pytest.raises(RuntimeError):
        await crud.decline_friendship_request(BOB, ALICE)
