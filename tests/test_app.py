import pytest
from app.app import LoggingRouter, _handle_command
from suggest.config import Settings
from suggest.search_bar import SearchBar

from fakes import DEBOUNCE, settle


@pytest.fixture
def router():
    return LoggingRouter()


class TestCommands:
    """Test the terminal host's ':' commands."""

    @pytest.mark.asyncio
    async def test_enter_navigates(self, service, router):
        """Test that :enter selects the top suggestion."""
        async with SearchBar(router.push, fetch=service, settings=Settings(debounce_ms=int(DEBOUNCE * 1000))) as bar:
            bar.on_input("cse")
            await settle(bar.fetcher)

            assert _handle_command(bar, ":enter") is True

        assert router.history == ["/results?course=CSE%203320"]

    @pytest.mark.asyncio
    async def test_numbered_pick(self, service, router):
        """Test that :2 clicks the second suggestion."""
        async with SearchBar(router.push, fetch=service, settings=Settings(debounce_ms=int(DEBOUNCE * 1000))) as bar:
            bar.on_input("cse")
            await settle(bar.fetcher)

            _handle_command(bar, ":2")

        assert router.history == ["/results?course=CSE%201310"]

    @pytest.mark.asyncio
    async def test_out_of_range_pick(self, service, router, capsys):
        """Test that a missing index is reported, not raised."""
        async with SearchBar(router.push, fetch=service) as bar:
            _handle_command(bar, ":7")

        assert router.history == []
        assert "no suggestion #7" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_quit_stops_loop(self, service, router):
        """Test that :quit ends the input loop."""
        async with SearchBar(router.push, fetch=service) as bar:
            assert _handle_command(bar, ":quit") is False
