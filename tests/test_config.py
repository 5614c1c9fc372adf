"""Tests for ContextVar-based render configuration.

Validates thread isolation, context manager behavior and from_dict filtering.
"""

import logging
from threading import Thread

import pytest

from svgstream import (
    Document,
    RenderConfig,
    get_render_config,
    render,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from svgstream.config import SVG_NAMESPACE


class TestRenderConfigDataclass:
    """Test RenderConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = RenderConfig()
        assert config.default_width == 500
        assert config.default_height == 500
        assert config.namespace == SVG_NAMESPACE == "http://www.w3.org/2000/svg"
        assert config.id_prefix is None
        assert config.invalid_element_log_level == logging.WARNING

    def test_immutability(self) -> None:
        config = RenderConfig()
        with pytest.raises(AttributeError):
            config.default_width = 10  # type: ignore[misc]

    def test_from_dict(self) -> None:
        config = RenderConfig.from_dict({"default_width": 800, "id_prefix": "a"})
        assert config.default_width == 800
        assert config.id_prefix == "a"
        assert config.default_height == 500

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = RenderConfig.from_dict({"unknown_key": 1, "default_height": 50})
        assert config == RenderConfig(default_height=50)

    def test_from_empty_dict(self) -> None:
        assert RenderConfig.from_dict({}) == RenderConfig()


class TestContextVarAccess:
    """Test get/set/reset of the active config."""

    def setup_method(self) -> None:
        reset_render_config()

    def teardown_method(self) -> None:
        reset_render_config()

    def test_default_config(self) -> None:
        assert get_render_config() == RenderConfig()

    def test_set_and_reset(self) -> None:
        set_render_config(RenderConfig(default_width=1))
        assert get_render_config().default_width == 1
        reset_render_config()
        assert get_render_config().default_width == 500

    def test_set_config_affects_render(self) -> None:
        set_render_config(RenderConfig(default_width=640, default_height=480))
        assert 'width="640" height="480"' in render(Document())

    def test_context_manager_restores(self) -> None:
        outer = RenderConfig(default_width=10)
        set_render_config(outer)
        with render_config_context(RenderConfig(default_width=20)):
            assert get_render_config().default_width == 20
        assert get_render_config() is outer

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with render_config_context(RenderConfig(default_width=20)):
                raise ValueError("test")
        assert get_render_config().default_width == 500

    def test_nested_contexts(self) -> None:
        with render_config_context(RenderConfig(id_prefix="a")):
            with render_config_context(RenderConfig(id_prefix="b")):
                assert get_render_config().id_prefix == "b"
            assert get_render_config().id_prefix == "a"
        assert get_render_config().id_prefix is None


class TestThreadIsolation:
    """Config set in one thread is not visible in another."""

    def test_thread_changes_do_not_leak(self) -> None:
        """A config set inside a worker thread stays in that thread."""
        reset_render_config()

        def worker() -> None:
            set_render_config(RenderConfig(default_width=1))

        thread = Thread(target=worker)
        thread.start()
        thread.join()

        assert get_render_config() == RenderConfig()

    def test_threads_render_independently(self) -> None:
        results: dict[int, str] = {}

        def worker(width: int) -> None:
            with render_config_context(RenderConfig(default_width=width)):
                results[width] = render(Document())

        threads = [Thread(target=worker, args=(w,)) for w in (100, 200, 300)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for width, markup in results.items():
            assert f'width="{width}"' in markup
