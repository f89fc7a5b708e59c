import httpx
import pytest

from wgapi.client import AsyncWGAPI
from wgapi.errors import InvalidArgument, TransportError


@pytest.fixture
def seen():
    return []


@pytest.fixture
def client(seen):
    def handler(request):
        seen.append(request)
        return httpx.Response(200, text='{"status": "ok", "data": {}}')

    return AsyncWGAPI("K", "eu", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_clan_list(client, seen):
    body = await client.clan_list("Panzer")

    assert body == '{"status": "ok", "data": {}}'
    assert str(seen[0].url) == "http://api.worldoftanks.eu/wot/clan/list/?search=Panzer&application_id=K&language=en"


@pytest.mark.asyncio
async def test_post(client, seen):
    client.set_method("POST")
    client.set_locale("pl")
    await client.clan_info(500001, fields=["tag"])

    request = seen[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.content == b"clan_id=500001&fields=tag&application_id=K&language=pl"


def test_validation_is_immediate(client, seen):
    with pytest.raises(InvalidArgument):
        client.clan_list("")
    assert seen == []


@pytest.mark.asyncio
async def test_transport_failure():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = AsyncWGAPI("K", "ru", transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError) as exc:
        await client.ratings_types()
    assert exc.value.code == "ReadTimeout"
    assert str(exc.value) == "[ReadTimeout] timed out"
