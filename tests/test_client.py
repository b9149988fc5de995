from unittest.mock import MagicMock

import pytest
import requests
from suggest.client import SuggestionClient, SuggestionServiceError
from suggest.models import Category


def _response(status=200, payload=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return SuggestionClient(api_base="http://courses.test/", timeout=5, session=session)


class TestSearchRequest:
    """Test the outgoing GET."""

    def test_url_encodes_query(self, client, session):
        """Test that the query is percent-encoded like encodeURIComponent."""
        session.get.return_value = _response(payload=[])

        client.search("CSE 3320 & more")

        session.get.assert_called_once_with(
            "http://courses.test/api/courses/search?query=CSE%203320%20%26%20more",
            timeout=5,
        )

    def test_custom_search_path(self, session):
        """Test that the endpoint path is configurable."""
        session.get.return_value = _response(payload=[])
        client = SuggestionClient(api_base="http://x", search_path="/suggest", session=session)

        assert client.search_url("ab") == "http://x/suggest?query=ab"


class TestSearchResponse:
    """Test parsing and failure mapping."""

    def test_parses_suggestions(self, client, session):
        """Test that wire keys map onto Suggestion fields."""
        session.get.return_value = _response(payload=[
            {"suggestion": "CSE 3320 OPERATING SYSTEMS", "type": "course"},
            {"suggestion": "Jane Smith", "type": "professor"},
        ])

        results = client.search("cse")

        assert [r.text for r in results] == ["CSE 3320 OPERATING SYSTEMS", "Jane Smith"]
        assert [r.category for r in results] == [Category.COURSE, Category.PROFESSOR]

    def test_empty_list(self, client, session):
        """Test that no matches is an empty list, not an error."""
        session.get.return_value = _response(payload=[])
        assert client.search("zz") == []

    def test_non_success_status(self, client, session):
        """Test that non-2xx raises with the status code."""
        session.get.return_value = _response(status=503)

        with pytest.raises(SuggestionServiceError) as excinfo:
            client.search("cse")

        assert excinfo.value.status_code == 503

    def test_network_error(self, client, session):
        """Test that transport failures are wrapped."""
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(SuggestionServiceError) as excinfo:
            client.search("cse")

        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

    def test_invalid_json(self, client, session):
        """Test that an unparsable body is a service error."""
        session.get.return_value = _response(json_error=ValueError("Expecting value"))

        with pytest.raises(SuggestionServiceError):
            client.search("cse")

    def test_unexpected_shape(self, client, session):
        """Test that a body that is not a suggestion list is a service error."""
        session.get.return_value = _response(payload={"results": []})

        with pytest.raises(SuggestionServiceError):
            client.search("cse")

    def test_unknown_type(self, client, session):
        """Test that an unknown suggestion type is rejected."""
        session.get.return_value = _response(payload=[{"suggestion": "x", "type": "building"}])

        with pytest.raises(SuggestionServiceError):
            client.search("cse")


class TestAsyncSearch:
    """Test the event-loop friendly wrapper."""

    @pytest.mark.asyncio
    async def test_asearch_returns_results(self, client, session):
        """Test that asearch runs search() and returns its result."""
        session.get.return_value = _response(payload=[{"suggestion": "Jane Smith", "type": "professor"}])

        results = await client.asearch("smith")

        assert results[0].text == "Jane Smith"

    @pytest.mark.asyncio
    async def test_asearch_propagates_service_error(self, client, session):
        """Test that failures surface as SuggestionServiceError."""
        session.get.side_effect = requests.Timeout("slow")

        with pytest.raises(SuggestionServiceError):
            await client.asearch("cse")
