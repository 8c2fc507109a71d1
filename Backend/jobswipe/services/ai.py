# backend/jobswipe/services/ai.py

import json
import logging
from functools import lru_cache
from typing import List, Optional

from openai import OpenAI, OpenAIError

from jobswipe.config import settings
from jobswipe.models.user import Role

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3

# Used when no API key is configured
STATIC_SUGGESTIONS = {
    Role.JOBSEEKER: [
        "Hi! I'm excited about this opportunity. I'd love to learn more about the role.",
        "Thank you for matching! I believe my experience aligns well with what you're looking for.",
        "Hello! I'm very interested in this position. When would be a good time to chat?",
    ],
    Role.RECRUITER: [
        "Hi! Your profile caught my attention. Would you be interested in discussing this opportunity?",
        "Hello! I think you'd be a great fit for our team. Let's schedule a call!",
        "Thanks for your interest! I'd love to tell you more about the role and our company.",
    ],
}

SYSTEM_PROMPT = """You are a professional communication coach. Generate appropriate opening messages for a job-related conversation between two people who just matched. Return a JSON object:
{
  "suggestions": ["3 short, personalized message options"]
}"""


class SuggestionClient:
    """
    Asks the language model for conversation openers. Purely advisory: any
    failure yields an empty list instead of an error.
    """

    def __init__(self, api_key: Optional[str], model: str, timeout: float):
        self.model = model
        self.client = None
        if api_key:
            # Single attempt; callers fall back to an empty list
            self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
            logger.info("OpenAI client initialized for message suggestions")

    @property
    def configured(self) -> bool:
        return self.client is not None

    def opening_lines(
        self,
        role: Role,
        job_title: Optional[str] = None,
        previous_messages: Optional[List[str]] = None,
    ) -> List[str]:
        if not self.configured:
            return STATIC_SUGGESTIONS[role][:MAX_SUGGESTIONS]

        previous_messages = previous_messages or []
        context = [
            f"Sender: {role.value}",
            f"Context: Matched for {job_title or 'a job opportunity'}",
        ]
        if job_title:
            context.append(f"Job Title: {job_title}")
        if previous_messages:
            context.append(f"Previous messages: {' | '.join(previous_messages)}")
        else:
            context.append("This is the first message")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": "Generate messages for:\n" + "\n".join(context)},
                ],
                response_format={"type": "json_object"},
                temperature=0.8,
            )
            if not response.choices:
                logger.warning("AI response contained no choices")
                return []
            content = response.choices[0].message.content or "{}"
            data = json.loads(content)
        except (OpenAIError, json.JSONDecodeError) as e:
            logger.warning(f"Message suggestion request failed: {e}")
            return []

        suggestions = data.get("suggestions") if isinstance(data, dict) else None
        if not isinstance(suggestions, list):
            logger.warning("AI response did not contain a suggestions list")
            return []
        cleaned = [s.strip() for s in suggestions if isinstance(s, str) and s.strip()]
        return cleaned[:MAX_SUGGESTIONS]


@lru_cache(maxsize=1)
def get_suggestion_client() -> SuggestionClient:
    """Dependency returning the shared suggestion client."""
    return SuggestionClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        timeout=settings.AI_TIMEOUT_SECONDS,
    )
