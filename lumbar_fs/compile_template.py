"""Default template compiler backed by Jinja2."""

from jinja2 import Environment, Template, TemplateSyntaxError

from lumbar_fs.errors import TemplateCompileError

_environment = Environment(keep_trailing_newline=True)


def compile_template(text: str) -> Template:
    """Compile ``text`` into a renderable template."""
    try:
        return _environment.from_string(text)
    except TemplateSyntaxError as e:
        raise TemplateCompileError(f"line {e.lineno}: {e.message}") from e
