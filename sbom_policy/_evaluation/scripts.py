"""Script-backed curation and policy hooks.

Curation and policy logic is written by users as small Python scripts:

    # curation script
    def curate_material(material):
        if material.name == "internal-lib":
            material.licenses = ["Proprietary"]
            material.update_annotation("curated", "true")

    # policy script
    def evaluate(material, result):
        if not material.licenses:
            result.add_warning("no license information")

Each script is compiled once per run into its own module namespace and its
hook function is called once per material. Return values are ignored: the
curation hook works by mutating the material it receives and the policy hook
by calling ``add_error`` / ``add_warning`` on the result.

Scripts run with the full privileges of the process.
"""

import types
from pathlib import Path
from typing import Any, Callable, Optional, Union

from ..exceptions import EngineError, SourceReadError
from ..logging_config import logger
from ..material import Material
from .models import EvaluateOutcome

DEFAULT_POLICY = '''
#!/usr/bin/python

allowed_licenses = [
    "Apache-2.0",
    "MIT",
    "BSD-3-Clause",
    "Unlicense",
]

def evaluate(material, result):
    for license in material.licenses:
        if license not in allowed_licenses:
           result.add_error(f"{license} is not allowed")
'''

DEFAULT_CURATION = '''
#!/usr/bin/python

def curate_material(material):
    pass
'''

POLICY_HOOK = "evaluate"
CURATION_HOOK = "curate_material"


class HookScript:
    """
    A user script compiled into an isolated module with one required hook.

    Args:
        source: Python source text of the script
        hook_name: Name of the function the script must define
        filename: Name used in tracebacks and error messages

    Raises:
        EngineError: If the script does not compile, fails while loading, or
            does not define a callable hook
    """

    def __init__(self, source: str, hook_name: str, filename: str = "<script>") -> None:
        self.hook_name = hook_name
        self.filename = filename
        self.module = types.ModuleType(f"sbom_policy_script_{hook_name}")
        self.module.__file__ = filename

        try:
            code = compile(source, filename, "exec")
            exec(code, self.module.__dict__)
        except (Exception, SystemExit) as e:
            raise EngineError(f"Failed to load script {filename}: {e}") from e

        hook = getattr(self.module, hook_name, None)
        if not callable(hook):
            raise EngineError(f"Script {filename} does not define a callable '{hook_name}'")
        self._hook: Callable[..., Any] = hook
        logger.debug(f"Loaded {hook_name}() from {filename}")

    def call(self, *args: Any) -> None:
        """Invoke the hook. Any exception it raises, SystemExit included, becomes an EngineError."""
        try:
            self._hook(*args)
        except (Exception, SystemExit) as e:
            raise EngineError(f"{self.hook_name}() in {self.filename} raised {type(e).__name__}: {e}") from e


class ScriptCurator:
    """Curator backed by a ``curate_material(material)`` script function."""

    def __init__(self, source: str = DEFAULT_CURATION, filename: str = "<default curation>") -> None:
        self.script = HookScript(source, CURATION_HOOK, filename)

    def curate(self, material: Material) -> Material:
        self.script.call(material)
        return material


class ScriptPolicy:
    """Policy backed by an ``evaluate(material, result)`` script function."""

    def __init__(self, source: str = DEFAULT_POLICY, filename: str = "<default policy>") -> None:
        self.script = HookScript(source, POLICY_HOOK, filename)

    def evaluate(self, material: Material) -> EvaluateOutcome:
        outcome = EvaluateOutcome()
        self.script.call(material, outcome)
        return outcome


def read_script(path: Union[str, Path]) -> str:
    """
    Read the text of a hook script.

    Raises:
        SourceReadError: If the file cannot be opened or read
    """
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Cannot read script {path}: {e}") from e


def load_policy(path: Optional[Union[str, Path]] = None) -> ScriptPolicy:
    """Build the policy from a script file, or the built-in policy when path is None."""
    if path is None:
        logger.debug("No policy script given, using the built-in policy")
        return ScriptPolicy()
    return ScriptPolicy(read_script(path), filename=str(path))


def load_curator(path: Optional[Union[str, Path]] = None) -> ScriptCurator:
    """Build the curator from a script file, or the identity curation when path is None."""
    if path is None:
        logger.debug("No curation script given, using the built-in curation")
        return ScriptCurator()
    return ScriptCurator(read_script(path), filename=str(path))
