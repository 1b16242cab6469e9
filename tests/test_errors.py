"""Tests for centra.errors — exception hierarchy and messages."""

from centra.errors import CentraError, ConfigurationError, UnboundMuxError


class TestHierarchy:
    def test_configuration_error_is_centra_error(self) -> None:
        assert issubclass(ConfigurationError, CentraError)

    def test_unbound_is_centra_error(self) -> None:
        assert issubclass(UnboundMuxError, CentraError)

    def test_unbound_is_lookup_error(self) -> None:
        assert issubclass(UnboundMuxError, LookupError)


class TestUnboundMuxError:
    def test_default_message_names_the_fix(self) -> None:
        assert "mux.handler" in str(UnboundMuxError())

    def test_custom_detail(self) -> None:
        assert str(UnboundMuxError("no mux on /admin")) == "no mux on /admin"
