#!/usr/bin/env python3
"""Compile email templates by inlining CSS and minifying HTML.

Source templates live in rental_api/templates/emails/*.j2; the compiled
output (rendered at runtime by rental_api.core.email) goes to compiled/.

Run after modifying a source template:
    python scripts/compile_emails.py
"""

import argparse
from pathlib import Path

import css_inline
import minify_html
from jinja2 import Environment

from rental_api.core.constants import (
    CompiledEmailTemplatesDir,
    EmailTemplatesDir,
    JinjaEmailTemplatesEnv,
)

# Template name -> Jinja2 variables it renders at send time
TEMPLATES: dict[str, list[str]] = {
    "email-verification.j2": ["code", "expires_minutes"],
    "password-reset-code.j2": ["code", "expires_minutes"],
    "password-reset.j2": ["reset_url", "expires_minutes"],
}

# URL-shaped placeholders survive minification with their quotes intact
MARKER_URL_PREFIX = "https://jinja-placeholder.local/var/"


def restore_variables(html: str, variables: list[str]) -> str:
    """Swap placeholder markers back to ``{{ var }}`` expressions."""
    for var in variables:
        marker = f"{MARKER_URL_PREFIX}{var}"
        jinja_var = f"{{{{ {var} }}}}"
        # The minifier may drop quotes around attribute values
        html = html.replace(f"={marker}>", f'="{jinja_var}">')
        html = html.replace(f"={marker} ", f'="{jinja_var}" ')
        html = html.replace(f'"{marker}"', f'"{jinja_var}"')
        html = html.replace(marker, jinja_var)
    return html


def compile_template(
    env: Environment,
    template_name: str,
    variables: list[str],
    output_dir: Path,
) -> Path:
    """Render one template with placeholders, inline CSS, minify, save."""
    context = {var: f"{MARKER_URL_PREFIX}{var}" for var in variables}
    html = env.get_template(template_name).render(**context)
    html = css_inline.inline(html)
    html = minify_html.minify(html, minify_css=True)
    html = restore_variables(html, variables)

    output_path = output_dir / (Path(template_name).stem + ".html")
    output_path.write_text(html, encoding="utf-8")
    return output_path


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=CompiledEmailTemplatesDir,
        help="Where compiled .html templates are written",
    )
    args = parser.parse_args()

    args.output_dir.mkdir(parents=True, exist_ok=True)
    print("Compiling email templates...")

    for template_name, variables in TEMPLATES.items():
        if not (EmailTemplatesDir / template_name).exists():
            print(f"  ✗ {template_name} (not found)")
            continue
        output_path = compile_template(
            JinjaEmailTemplatesEnv, template_name, variables, args.output_dir
        )
        print(f"  ✓ {template_name} -> {output_path.name}")

    print(f"\nCompiled templates saved to: {args.output_dir}")


if __name__ == "__main__":
    main()
