"""Tests for warble.config: RouterConfig frozen dataclass."""

import dataclasses

import pytest

from warble.config import RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.default_method == "GET"
        assert cfg.eager_compile is False
        assert cfg.logger_name == "warble.routing"

    def test_override(self) -> None:
        cfg = RouterConfig(default_method="POST", eager_compile=True, logger_name="app.routes")

        assert cfg.default_method == "POST"
        assert cfg.eager_compile is True
        assert cfg.logger_name == "app.routes"

    def test_frozen(self) -> None:
        cfg = RouterConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.eager_compile = True  # type: ignore[misc]

    def test_replace(self) -> None:
        cfg = dataclasses.replace(RouterConfig(), eager_compile=True)
        assert cfg.eager_compile is True
        assert cfg.default_method == "GET"
