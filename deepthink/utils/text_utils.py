"""Text processing utilities"""

from typing import List

from ..models.research_models import FinalReport


def format_markdown_section(title: str, content: str, level: int = 2) -> str:
    """Format a section in markdown"""
    return f"{'#' * level} {title}\n\n{content.strip()}\n\n"


def create_markdown_document(report: FinalReport) -> str:
    """Create a markdown document from a final report"""
    doc: List[str] = [f"# {report.title or 'Research Report'}\n\n"]
    doc.append(format_markdown_section("Executive Summary", report.summary))
    for section in report.sections:
        doc.append(format_markdown_section(section.title, section.content))
    doc.append(format_markdown_section("Conclusion", report.conclusion))
    return "".join(doc).rstrip() + "\n"


def safe_filename(text: str, suffix: str) -> str:
    """Creates a safe filename from a report title or topic."""
    base = ''.join(c if c.isalnum() or c.isspace() else '_' for c in text[:50])
    base = base.strip().replace(' ', '_')
    return f"{base or 'report'}_{suffix}"


def truncate(text: str, limit: int = 150) -> str:
    """Shorten *text* for previews, marking the cut with an ellipsis"""
    return text if len(text) <= limit else text[:limit].rstrip() + "..."
