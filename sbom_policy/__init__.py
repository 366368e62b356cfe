"""sbom-policy: evaluate software bills of materials against license policies."""


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    # Method 1: Try importlib.metadata (preferred for installed packages)
    try:
        from importlib.metadata import version

        return version("sbom-policy")
    except Exception:
        pass

    # Method 2: Try reading from pyproject.toml directly
    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
    except Exception:
        pass

    # Final fallback
    return "unknown"


__version__ = _get_version()

from ._evaluation import (  # noqa: E402
    EvaluateOutcome,
    EvaluationReport,
    MaterialResult,
    ScriptCurator,
    ScriptPolicy,
    evaluate_materials,
    load_curator,
    load_policy,
)
from .formats import SourceFormat, detect_source_format  # noqa: E402
from .loader import load_materials, load_materials_from_file  # noqa: E402
from .material import Material  # noqa: E402

__all__ = [
    "__version__",
    "EvaluateOutcome",
    "EvaluationReport",
    "Material",
    "MaterialResult",
    "ScriptCurator",
    "ScriptPolicy",
    "SourceFormat",
    "detect_source_format",
    "evaluate_materials",
    "load_curator",
    "load_materials",
    "load_materials_from_file",
    "load_policy",
]
