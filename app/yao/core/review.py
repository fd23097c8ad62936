"""Interactive PKGBUILD review.

Before a package is built the user may open its PKGBUILD in an editor.
Closing the editor with a non-zero status aborts the installation.
"""

import logging
import os
import shlex
from collections.abc import Callable, Mapping
from pathlib import Path

from yao.core.config import Config
from yao.core.errors import EditorNotFoundError
from yao.utils.formatting import print_command, print_step
from yao.utils.shell import run_interactive

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "nano"
RECIPE_FILENAME = "PKGBUILD"

ConfirmFn = Callable[[str], bool]
PromptFn = Callable[[str, str], str]


def choose_editor(
    config: Config,
    prompt: PromptFn,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the editor for PKGBUILD review.

    Priority: configured editor (YAO_EDITOR) > VISUAL > EDITOR > ask the
    user, offering ``nano`` as default.

    Args:
        config: Resolved configuration.
        prompt: Asks a question with a default answer and returns the reply.
        environ: Environment mapping. If None, uses os.environ.

    Returns:
        Editor command line (may contain arguments).
    """
    env = os.environ if environ is None else environ
    for candidate in (config.editor, env.get("VISUAL"), env.get("EDITOR")):
        if candidate and candidate.strip():
            return candidate

    choice = prompt(f":: Editor to use for {RECIPE_FILENAME}", DEFAULT_EDITOR)
    return choice.strip() or DEFAULT_EDITOR


class RecipeReviewer:
    """Offers to open a package's PKGBUILD before it is built."""

    def __init__(self, config: Config, confirm: ConfirmFn, prompt: PromptFn) -> None:
        self._config = config
        self._confirm = confirm
        self._prompt = prompt

    def __call__(self, name: str, build_dir: Path) -> bool:
        """Run the review step for one package.

        Args:
            name: Package name.
            build_dir: Extracted snapshot directory.

        Returns:
            False if the user aborted from the editor, True otherwise.

        Raises:
            EditorNotFoundError: If the editor command cannot be started.
        """
        recipe = build_dir / RECIPE_FILENAME
        if not recipe.is_file():
            if self._config.verbose:
                print_step(f"No {RECIPE_FILENAME} found in {build_dir}")
            return True

        if not self._confirm(f":: View {RECIPE_FILENAME} for {name}?"):
            return True

        editor = choose_editor(self._config, self._prompt)
        print_step(f"Opening {RECIPE_FILENAME} with {editor}")
        argv = [*shlex.split(editor), str(recipe)]
        if self._config.verbose:
            print_command(shlex.join(argv))
        try:
            returncode = run_interactive(argv)
        except FileNotFoundError as e:
            raise EditorNotFoundError(argv[0]) from e
        if returncode != 0:
            logger.info("Editor %s exited with %d for %s", editor, returncode, name)
            return False
        return True
