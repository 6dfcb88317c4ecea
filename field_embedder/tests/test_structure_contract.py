"""Structure contract tests for the field_embedder package."""
from __future__ import annotations

from pathlib import Path

import field_embedder


def test_structure_contract() -> None:
    """Fail if required package files are missing."""
    root = Path(__file__).resolve().parents[1]
    required = [
        root / "__init__.py",
        root / "__main__.py",
        root / "exceptions" / "errors.py",
        root / "models" / "field_enums.py",
        root / "models" / "field_position.py",
        root / "models" / "pdf_rect.py",
        root / "models" / "image_blob.py",
        root / "models" / "embed_config.py",
        root / "logic" / "coordinate_transform.py",
        root / "logic" / "date_formatter.py",
        root / "logic" / "overlay_painter.py",
        root / "logic" / "pdf_document.py",
        root / "logic" / "field_embedder.py",
        root / "logic" / "batch_embedder.py",
        root.parent / "core" / "config" / "defaults.ini",
    ]
    missing = [str(p) for p in required if not p.exists()]
    assert not missing, f"Missing required files: {missing}"


def test_public_api_exports() -> None:
    """Every name in __all__ resolves on the package."""
    missing = [name for name in field_embedder.__all__ if not hasattr(field_embedder, name)]
    assert not missing, f"Unresolved exports: {missing}"
