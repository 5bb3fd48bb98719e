"""Common fixtures for testing the icon sprite builder."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

SVG_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24">\n'
    "  <title>{title}</title>\n"
    '  <path d="{d}" fill="#000"/>\n'
    "</svg>\n"
)


@pytest.fixture(autouse=True)
def reset_loggers() -> Iterator[None]:
    """Drop handlers installed by setup_logging so they never outlive a test."""
    yield
    for name in ("iconsprite", "test_logger"):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
        logger.setLevel(logging.NOTSET)


@pytest.fixture()
def write_svg(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing a one-path icon file below tmp_path."""

    def _write(name: str, d: str = "M0 0h24v24H0z", directory: str | None = None) -> Path:
        target_dir = tmp_path / directory if directory else tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(SVG_TEMPLATE.format(title=Path(name).stem, d=d), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def icon_files(write_svg: Callable[..., Path]) -> list[Path]:
    """Two icons passed in reverse alphabetical order."""
    return [write_svg("b.svg", d="M2 2h20v20H2z"), write_svg("a.svg", d="M1 1h22v22H1z")]

