from datetime import datetime, timezone

from jinja2 import Environment, PackageLoader, select_autoescape


def format_quantity(value) -> str:
    """Render 2.0 as "2" and 2.5 as "2.5"."""
    try:
        return f"{float(value):g}"
    except (TypeError, ValueError):
        return str(value)


# Initialize templates once
email_templates = Environment(
    loader=PackageLoader("stockwatch", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
email_templates.filters["quantity"] = format_quantity
email_templates.globals["now"] = lambda: datetime.now(timezone.utc)
