"""Tests for plugin resolution and the optimize entry point."""

import logging

import pytest

from iconsprite.builder import minify
from iconsprite.constants import PRESET_DEFAULT
from iconsprite.exceptions import InvalidConfigError, MarkupError
from iconsprite.models.config import OptimizeConfig, PluginSpec
from iconsprite.optimizer import optimize
from iconsprite.optimizer.optimize import DEFAULT_PRESET_PLUGINS, resolve_plugins
from iconsprite.optimizer.plugins import PLUGINS


class TestResolvePlugins:
    """Test turning plugin configuration into an ordered pipeline."""

    def test_every_preset_member_is_registered(self) -> None:
        """Test the preset only names known plugins."""
        assert set(DEFAULT_PRESET_PLUGINS) <= set(PLUGINS)

    def test_preset_expands_in_place(self) -> None:
        """Test the preset is expanded at its position in the list."""
        resolved = resolve_plugins(["removeXMLNS", PRESET_DEFAULT, "sortAttrs"])
        names = [name for name, _ in resolved]
        assert names == ["removeXMLNS", *DEFAULT_PRESET_PLUGINS, "sortAttrs"]

    def test_preset_override_disables_plugin(self) -> None:
        """Test an override of False drops a preset member."""
        spec = PluginSpec(name=PRESET_DEFAULT, params={"overrides": {"removeViewBox": False}})
        names = [name for name, _ in resolve_plugins([spec])]
        assert "removeViewBox" not in names
        assert len(names) == len(DEFAULT_PRESET_PLUGINS) - 1

    def test_preset_override_passes_params(self) -> None:
        """Test a dict override becomes the member's parameters."""
        spec = PluginSpec(name=PRESET_DEFAULT, params={"overrides": {"removeDesc": {"removeAny": True}}})
        params = dict(resolve_plugins([spec]))
        assert params["removeDesc"] == {"removeAny": True}
        assert params["removeTitle"] == {}

    def test_unknown_override_raises(self) -> None:
        """Test overriding a plugin outside the preset is rejected."""
        spec = PluginSpec(name=PRESET_DEFAULT, params={"overrides": {"sortAttrs": False}})
        with pytest.raises(InvalidConfigError) as exc_info:
            resolve_plugins([spec])
        assert exc_info.value.details["plugins"] == ["sortAttrs"]

    def test_unknown_plugin_raises(self) -> None:
        """Test an unregistered plugin name is rejected."""
        with pytest.raises(InvalidConfigError, match="Unknown optimizer plugin: removeEverything"):
            resolve_plugins(["removeEverything"])

    def test_spec_params_are_kept(self) -> None:
        """Test plugin specs keep their parameters."""
        spec = PluginSpec(name="sortAttrs", params={"order": ["d"]})
        assert resolve_plugins([spec]) == [("sortAttrs", {"order": ["d"]})]


class TestOptimize:
    """Test the optimize function."""

    def test_no_plugins_only_reformats(self) -> None:
        """Test an empty plugin list keeps content but drops the prolog and whitespace."""
        svg = '<?xml version="1.0"?>\n<svg>\n  <!-- note -->\n  <title>x</title>\n</svg>\n'
        assert optimize(svg) == "<svg><!-- note --><title>x</title></svg>"

    def test_preset_strips_editor_content(self) -> None:
        """Test the preset removes comments, metadata, titles and empty groups."""
        svg = (
            '<svg xmlns="http://www.w3.org/2000/svg" version="1.1">'
            "<!-- Generator: Sketch --><title>Home</title><metadata/>"
            '<g><g/><path d="M0 0"/></g></svg>'
        )
        result = optimize(svg, OptimizeConfig(plugins=[PRESET_DEFAULT]))
        assert result == '<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0" /></svg>'

    def test_pretty_output(self) -> None:
        """Test pretty output uses the configured indentation."""
        config = OptimizeConfig(plugins=[], pretty=True, indent="  ")
        assert optimize("<svg><g><path/></g></svg>", config) == (
            "<svg>\n  <g>\n    <path />\n  </g>\n</svg>"
        )

    def test_unknown_plugin_checked_before_parsing(self) -> None:
        """Test configuration errors win over markup errors."""
        with pytest.raises(InvalidConfigError):
            optimize("not markup", OptimizeConfig(plugins=["nope"]))

    def test_malformed_markup_raises(self) -> None:
        """Test malformed markup raises MarkupError."""
        with pytest.raises(MarkupError):
            optimize("<svg>", OptimizeConfig(plugins=[PRESET_DEFAULT]))

    def test_plugins_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test each plugin run is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="iconsprite.optimizer.optimize"):
            optimize("<svg/>", OptimizeConfig(plugins=["removeXMLNS"]))
        assert "Running optimizer plugin removeXMLNS" in caplog.text


class TestMinify:
    """Test the icon minification pipeline."""

    def test_minify_icon(self) -> None:
        """Test a typical editor export is reduced to its drawing."""
        svg = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24">\n'
            "  <title>home</title>\n"
            '  <path d="M1 1h22v22H1z" fill="#000"/>\n'
            "</svg>\n"
        )
        assert minify(svg) == '<svg viewBox="0 0 24 24"><path fill="#000" d="M1 1h22v22H1z" /></svg>'

    def test_minify_keeps_view_box(self) -> None:
        """Test a viewBox equal to the dimensions survives."""
        svg = '<svg width="16" height="16" viewBox="0 0 16 16"><path d="M0 0"/></svg>'
        assert minify(svg) == '<svg viewBox="0 0 16 16"><path d="M0 0" /></svg>'

    def test_minify_derives_view_box(self) -> None:
        """Test dimensions without a viewBox are turned into one."""
        svg = '<svg width="20" height="10"><path d="M0 0"/></svg>'
        assert minify(svg) == '<svg viewBox="0 0 20 10"><path d="M0 0" /></svg>'

    def test_minify_moves_style_to_attributes(self) -> None:
        """Test inline style is converted and sorted into attributes."""
        svg = '<svg viewBox="0 0 1 1"><path d="M0 0" style="stroke:#fff;fill:none"/></svg>'
        assert minify(svg) == (
            '<svg viewBox="0 0 1 1"><path fill="none" stroke="#fff" d="M0 0" /></svg>'
        )

    def test_minify_bytes(self) -> None:
        """Test bytes input is accepted."""
        assert minify(b'<svg viewBox="0 0 1 1"/>') == '<svg viewBox="0 0 1 1" />'
