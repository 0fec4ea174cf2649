import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence

from google import genai
from google.genai import types

from core.config import settings

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """The model could not produce LaTeX for the submitted files."""


@dataclass(frozen=True)
class ResumeDocument:
    name: str
    mime_type: str
    content: bytes


LATEX_PROMPT = """You are an expert LaTeX typesetter.
Transform the attached resume material into a single, complete LaTeX document that compiles with pdflatex.
Preserve every piece of information (contact details, experience, education, skills, projects) and keep the original ordering of sections.
Use only standard packages. Return only the LaTeX source, with no explanations.
The attached files are: {file_names}."""

# Safety settings to ensure appropriate content
SAFETY_SETTINGS = [
    types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE)
    for category in (
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
]

_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*\n(.*?)\n\s*```\s*$", re.DOTALL)


def get_gemini_client() -> genai.Client:
    """
    Builds a Gemini client from the configured API key.

    :raises ConversionError: If GEMINI_API_KEY is not set.
    """
    if not settings.GEMINI_API_KEY:
        raise ConversionError("GEMINI_API_KEY environment variable is not set")
    return _client_for(settings.GEMINI_API_KEY)


# One client per key, reused across requests.
@lru_cache(maxsize=4)
def _client_for(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def generation_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        temperature=settings.GEMINI_TEMPERATURE,
        top_k=settings.GEMINI_TOP_K,
        top_p=settings.GEMINI_TOP_P,
        max_output_tokens=settings.GEMINI_MAX_OUTPUT_TOKENS,
        safety_settings=SAFETY_SETTINGS,
    )


def to_part(document: ResumeDocument) -> types.Part:
    return types.Part.from_bytes(data=document.content, mime_type=document.mime_type)


def strip_code_fence(text: str) -> str:
    """Unwraps a response that arrived as a single fenced Markdown block."""
    match = _FENCE.match(text)
    return match.group(1) if match else text.strip()


async def convert_resume_to_latex(documents: Sequence[ResumeDocument]) -> str:
    """
    Sends every document to Gemini in one request and returns the LaTeX source.

    :param documents: The resume files, in upload order.
    :return: The LaTeX document produced by the model.
    :raises ConversionError: If the client is not configured, the call fails or the reply is empty.
    """
    if not documents:
        raise ConversionError("No documents to convert")

    client = get_gemini_client()
    prompt = LATEX_PROMPT.format(file_names=", ".join(d.name for d in documents))
    contents = [to_part(d) for d in documents] + [prompt]

    try:
        response = await client.aio.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=contents,
            config=generation_config(),
        )
    except Exception as e:
        logger.error(f"Gemini request failed: {e}")
        raise ConversionError(f"Failed to convert resume to LaTeX: {e}") from e

    text = response.text
    if not text or not text.strip():
        raise ConversionError("The model returned an empty response")

    return strip_code_fence(text)
