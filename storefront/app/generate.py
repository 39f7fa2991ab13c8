#!/usr/bin/env python3
"""
Generation module for the FlexBot shopping assistant.

This module sends structured-output requests to the Gemini REST API.
"""

import json
from typing import Any, Dict, Optional

import requests

from .config import Config
from ..utils.errors import ProviderError
from ..utils.logger import get_logger

logger = get_logger()


class GenerationClient:
    """Client for JSON-mode generation with the Gemini API."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key or Config.GEMINI_API_KEY
        self.llm_model = model or Config.GEMINI_MODEL
        self.timeout = timeout or Config.GEMINI_TIMEOUT
        self.api_base_url = f"https://generativelanguage.googleapis.com/v1beta/models/{self.llm_model}:generateContent"

        if not self.api_key:
            raise ValueError("Gemini API key is required")

    def generate_json(self, contents: str, system_instruction: str, response_schema: Dict[str, Any],
                      temperature: float = 0.4) -> Dict[str, Any]:
        """
        Generate a JSON object that follows ``response_schema``.

        Args:
            contents: User turn sent to the model
            system_instruction: Persona and rules for the model
            response_schema: OpenAPI-style schema the reply must match

        Returns:
            The parsed JSON reply

        Raises:
            ProviderError: on transport errors, non-200 replies or unparseable output
        """
        payload = {
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": contents}]}],
            "generationConfig": {
                "temperature": temperature,
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

        logger.debug(f"[CHAT] sending request to Gemini model {self.llm_model}, prompt length: {len(contents)}")
        try:
            response = requests.post(
                self.api_base_url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            if response.status_code != 200:
                logger.warning(f"[CHAT] Gemini error response {response.status_code}: {response.text[:500]}")
                response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Error generating answer: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Gemini returned a non-JSON body: {e}") from e

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"].strip()
            return json.loads(text)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"[CHAT] unexpected Gemini response structure: {data}")
            raise ProviderError(f"Error parsing generation response: {e}") from e
