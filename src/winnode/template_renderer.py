# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template
from pathlib import Path

class TemplateRenderer:
    """
    Loads templates from a directory. Undefined variables are errors and the
    trailing newline of each template is preserved.
    """

    def __init__(self, templates_dir: Path):
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def load(self, template_name: str) -> Template:
        return self.env.get_template(template_name)
