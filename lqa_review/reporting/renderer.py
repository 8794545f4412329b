"""Summary report rendering using Jinja2.

Wraps Jinja2 template rendering with strict undefined checking so that a
missing context key fails loudly instead of producing a partial report.
"""

import logging
from typing import Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from .exceptions import ReportRenderError

logger = logging.getLogger(__name__)


class SummaryRenderer:
    """Renders the quality summary as plain text and HTML.

    Templates live in the lqa_review.reporting.templates package directory
    and are cached by the Jinja2 environment after first load.
    """

    def __init__(
        self,
        template_dir: str = "templates",
        text_template: str = "summary.txt.j2",
        html_template: str = "summary.html.j2",
    ):
        """Initialize renderer with a Jinja2 environment.

        Args:
            template_dir: Directory name within the lqa_review.reporting package
            text_template: Filename of the plain text template
            html_template: Filename of the HTML template
        """
        self.text_template_name = text_template
        self.html_template_name = html_template

        self.env = Environment(
            loader=PackageLoader("lqa_review.reporting", template_dir),
            autoescape=select_autoescape(enabled_extensions=("html.j2", "html")),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        logger.debug(f"Initialized SummaryRenderer with templates from {template_dir}")

    def render(self, context: Dict) -> Dict[str, str]:
        """Render both report formats.

        Args:
            context: Dictionary from build_summary_context

        Returns:
            Dictionary containing:
            - text: Rendered plain text report
            - html: Rendered HTML report

        Raises:
            ReportRenderError: If template rendering fails
        """
        try:
            text_template = self.env.get_template(self.text_template_name)
            html_template = self.env.get_template(self.html_template_name)

            text = text_template.render(context)
            html = html_template.render(context)
        except TemplateError as e:
            error_msg = f"Summary rendering failed: {e}"
            logger.error(error_msg, exc_info=True)
            raise ReportRenderError(
                error_msg,
                suggestions=["Build the context with build_summary_context"],
            ) from e

        logger.debug("Rendered quality summary", extra={"event": "reporting.summary.rendered"})
        return {"text": text, "html": html}
