"""AI progress summaries for projects using Gemini"""

import logging
from typing import Optional

from google import genai
from google.genai import errors, types
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from buildtrack.config import Settings, settings as default_settings
from buildtrack.schemas.project import Project

logger = logging.getLogger(__name__)

DEFAULT_QUESTION = (
    "Please provide a comprehensive executive summary of the construction progress, "
    "identifying any potential risks, delays, or notable achievements based on the weekly logs."
)

PROMPT_TEMPLATE = """You are an expert construction project manager AI assistant.

Project Details:
Name: {name}
Location: {location}
Status: {status}
Description: {description}

Weekly Progress Logs:
{updates}

Task:
{task}

Format your response with clear headings and bullet points using Markdown.
Be analytical and professional.
"""


class SummaryService:
    """
    Summarizes a project's weekly logs.

    Never raises for provider problems: a missing API key or a failed call
    returns an advisory message instead, so callers can show it as is.
    """

    API_KEY_MISSING_MESSAGE = "AI Analysis unavailable: API Key missing."
    FAILURE_MESSAGE = "An error occurred while generating the analysis. Please try again later."
    EMPTY_MESSAGE = "No analysis could be generated."

    def __init__(self, config: Optional[Settings] = None, client: Optional[genai.Client] = None):
        self.settings = config or default_settings
        self._client = client

    @property
    def available(self) -> bool:
        return self._client is not None or bool(self.settings.gemini_api_key)

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    @staticmethod
    def build_prompt(project: Project, question: Optional[str] = None) -> str:
        """
        Build the prompt for a project.

        Updates are listed newest week first.
        """
        updates = sorted(project.updates, key=lambda u: u.week_number, reverse=True)
        updates_text = "\n".join(
            f"Week {u.week_number} ({u.date.isoformat()}): {u.description}" for u in updates
        )
        task = f"User Question: {question}" if question and question.strip() else DEFAULT_QUESTION
        return PROMPT_TEMPLATE.format(
            name=project.name,
            location=project.location,
            status=project.status.value,
            description=project.description,
            updates=updates_text,
            task=task,
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, max=4),
        retry=retry_if_exception_type(errors.ServerError),
        reraise=True,
    )
    async def _generate(self, prompt: str) -> Optional[str]:
        response = await self._get_client().aio.models.generate_content(
            model=self.settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                thinking_config=types.ThinkingConfig(
                    thinking_budget=self.settings.gemini_thinking_budget
                ),
            ),
        )
        return response.text

    async def summarize(self, project: Project, question: Optional[str] = None) -> str:
        """
        Generate a Markdown progress analysis for a project.

        Args:
            project: Project to analyze
            question: Optional specific question; a general executive summary otherwise

        Returns:
            Analysis text, or an advisory message when the provider is unavailable
        """
        if not self.available:
            logger.warning("Gemini API key not configured, skipping analysis")
            return self.API_KEY_MISSING_MESSAGE

        prompt = self.build_prompt(project, question)
        try:
            text = await self._generate(prompt)
        except Exception as e:
            logger.error(f"Gemini API error for project {project.id}: {e}")
            return self.FAILURE_MESSAGE

        return text or self.EMPTY_MESSAGE
