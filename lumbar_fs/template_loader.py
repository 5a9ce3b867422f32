"""Template loading with compiled templates memoized per file."""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from lumbar_fs.artifact_store import ArtifactStore
from lumbar_fs.compile_template import compile_template
from lumbar_fs.errors import TemplateCompileError

logger = logging.getLogger(__name__)

TEMPLATE_ARTIFACT = "template"

DEFAULT_TEMPLATE_SUFFIXES = (".handlebars", ".jinja", ".j2")

Compiler = Callable[[str], Any]


class TemplateLoader:
    """Compiles inline templates, and template files once per cache generation."""

    def __init__(
        self,
        artifacts: ArtifactStore,
        compiler: Compiler = compile_template,
        suffixes: Iterable[str] = DEFAULT_TEMPLATE_SUFFIXES,
    ) -> None:
        self.artifacts = artifacts
        self.compiler = compiler
        self.suffixes = tuple(suffixes)

    def is_template_file(self, template: str) -> bool:
        return template.endswith(self.suffixes)

    async def load(self, template: str, split_on: str | None = None) -> Any:
        """Return the compiled form of ``template``.

        ``template`` is either template source or a path ending in a template
        suffix. With ``split_on`` the text is split on that delimiter and each
        fragment is compiled separately, giving a list of templates.
        """
        if not self.is_template_file(template):
            return self._compile(template, split_on)

        read = await self.artifacts.get_with_artifact(template, TEMPLATE_ARTIFACT)
        if read.artifact is not None:
            return read.artifact

        compiled = self._compile(read.data.decode("utf-8"), split_on)
        self.artifacts.set_artifact(template, TEMPLATE_ARTIFACT, compiled)
        logger.debug("Compiled template %s", template)
        return compiled

    def _compile(self, text: str, split_on: str | None) -> Any:
        try:
            if split_on:
                return [self.compiler(fragment) for fragment in text.split(split_on)]
            return self.compiler(text)
        except TemplateCompileError:
            raise
        except Exception as e:
            raise TemplateCompileError(str(e)) from e
