import pytest
from httpx import AsyncClient as HttpxAsyncClient

from solrdrv import AsyncClient, Collection, CollectionsAPI, __version__
from solrdrv.errors import SolrServerError, SolrUsageError
from solrdrv.json_handler import BuiltinHandler, OrjsonHandler, UjsonHandler


def test_base_url(client):
    assert client.base_url == "http://localhost:8983/solr"
    assert str(client.http_client.base_url) == "http://localhost:8983/solr/"


async def test_custom_base_url():
    async with AsyncClient("https", "solr.example.com", 443) as client:
        assert client.base_url == "https://solr.example.com:443/solr"


@pytest.mark.parametrize("scheme, host", (("", "localhost"), ("http", "")))
def test_invalid_client_args(scheme, host):
    with pytest.raises(SolrUsageError):
        AsyncClient(scheme, host, 8983)


async def test_custom_headers_and_auth():
    async with AsyncClient(
        custom_headers={"X-Test": "yes"}, auth=("solr", "SolrRocks")
    ) as client:
        assert client.http_client.headers["X-Test"] == "yes"
        assert client.http_client.auth is not None


@pytest.mark.parametrize("json_handler", (None, BuiltinHandler(), OrjsonHandler(), UjsonHandler()))
async def test_json_handler(json_handler):
    async with AsyncClient(json_handler=json_handler) as client:
        expected = type(json_handler) if json_handler else BuiltinHandler
        assert isinstance(client.json_handler, expected)
        assert isinstance(client.collection("users")._json_handler, expected)


async def test_context_manager_closes(monkeypatch):
    closed = []

    async def mock_aclose(self):
        closed.append(True)

    monkeypatch.setattr(HttpxAsyncClient, "aclose", mock_aclose)
    async with AsyncClient():
        pass

    assert closed == [True]


def test_collections(client):
    assert isinstance(client.collections(), CollectionsAPI)
    assert client.collections() is not client.collections()


def test_collection_handle(client, fake_solr):
    users = client.collection("users")

    assert isinstance(users, Collection)
    assert users.name == "users"
    assert str(users) == "Collection(name=users)"
    assert repr(users) == "Collection(name='users')"
    assert fake_solr.calls == []


def test_collection_builders_are_new(users):
    assert users.search() is not users.search()
    assert users.schema() is not users.schema()
    assert users.documents() is not users.documents()


async def test_get_system_info(client, fake_solr):
    fake_solr.respond(
        {
            "responseHeader": {"status": 0, "QTime": 10},
            "mode": "solrcloud",
            "lucene": {"solr-spec-version": "9.6.1"},
        }
    )
    got = await client.get_system_info()

    assert got["mode"] == "solrcloud"
    assert fake_solr.calls[0].url == "admin/info/system?wt=json"


async def test_get_system_info_error(client, fake_solr):
    fake_solr.respond_error("Unauthorized", 401)
    with pytest.raises(SolrServerError):
        await client.get_system_info()


def test_version():
    assert __version__ == "0.3.0"
