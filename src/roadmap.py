"""Roadmap submission handling - prompt, generate, render, display"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from src.generate import GenerationResult, LLMClient
from src.prompts import build_roadmap_prompt
from src.utils.markdown_render import render_markdown_to_html

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Generating your personalized roadmap... This may take a moment."


@dataclass(frozen=True)
class RoadmapRequest:
    """The three form fields read at submission time."""

    semester: str
    branch: str
    skills: str = ""


@dataclass(frozen=True)
class RoadmapOutcome:
    """What the display received once the submission finished."""

    html: str
    result: GenerationResult

    @property
    def succeeded(self) -> bool:
        return self.result.ok


def loading_panel() -> str:
    return f'<div class="loading-message">{LOADING_MESSAGE}</div>'


def result_panel(roadmap_html: str) -> str:
    return f'<div class="roadmap-result">{roadmap_html}</div>'


def error_panel(reason: str) -> str:
    return (
        '<div class="error-message">Sorry, we couldn\'t generate your roadmap. '
        f'<br><strong>Reason:</strong> {reason}</div>'
    )


def handle_submission(
    request: RoadmapRequest,
    llm_client: LLMClient,
    variant: Optional[str] = None,
    display: Optional[Callable[[str], None]] = None,
) -> RoadmapOutcome:
    """Run one submission from form fields to a final HTML panel

    Args:
        request: Form fields
        llm_client: Generation client
        variant: Optional prompt variant override
        display: Callable receiving each HTML panel (loading, then final)

    Returns:
        RoadmapOutcome holding the final panel and the generation result
    """
    if display:
        display(loading_panel())

    prompt = build_roadmap_prompt(
        request.semester,
        request.branch,
        request.skills,
        variant=variant,
    )
    logger.info(f"Generating roadmap for semester {request.semester}, branch {request.branch}")

    result = llm_client.generate(prompt)

    if result.ok:
        html = result_panel(render_markdown_to_html(result.text))
    else:
        logger.error(f"Error generating roadmap: {result.message}")
        html = error_panel(result.message)

    if display:
        display(html)
    return RoadmapOutcome(html=html, result=result)


def save_output(html: str, output_file: str = "roadmap.html"):
    """Save the final panel to an HTML file

    Args:
        html: Panel HTML
        output_file: Output file path
    """
    try:
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(html)
        logger.info(f"Roadmap saved to {output_file}")
    except IOError as e:
        logger.error(f"Failed to save roadmap: {e}")
        raise
