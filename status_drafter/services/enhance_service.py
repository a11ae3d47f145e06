import json
import logging
import re
from typing import Dict, Any, Optional

import httpx

from status_drafter.config import Settings, settings as default_settings
from status_drafter.services.exceptions import EnhancementError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional corporate editor.\n"
    "I will give you a JSON object containing status update fields "
    "(e.g., taskTitle, taskDesc, blockers, nextSteps).\n"
    "Your job is to rewrite the content of EACH field to be concise, professional, and action-oriented.\n"
    "Do NOT change the keys.\n"
    "Do NOT add conversational filler.\n"
    "Return ONLY the valid JSON object."
)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def strip_code_fence(content: str) -> str:
    """모델 응답이 ```json ... ``` 코드 블록으로 감싸져 있으면 벗겨냅니다."""
    content = content.strip()
    if content.startswith("```"):
        content = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", content, count=1), count=1)
    return content


def validate_enhanced_fields(requested: Dict[str, Any], enhanced: Any) -> Dict[str, str]:
    """
    모델이 돌려준 결과를 검증합니다.

    - 결과는 JSON 객체여야 합니다.
    - 요청에 없던 키는 버립니다.
    - 남은 값은 모두 문자열이어야 합니다.
    - 요청했지만 응답에 없는 키는 결과에도 없습니다. (호출자는 "변경 없음"으로 취급)

    Raises:
        EnhancementError: 객체가 아니거나 문자열이 아닌 값이 있을 때.
    """
    if not isinstance(enhanced, dict):
        raise EnhancementError(f"Expected a JSON object, got {type(enhanced).__name__}.")

    result = {}
    for key, value in enhanced.items():
        if key not in requested:
            logger.debug("Dropping unexpected key from enhancement response: %s", key)
            continue
        if not isinstance(value, str):
            raise EnhancementError(f"Field '{key}' must be a string, got {type(value).__name__}.")
        result[key] = value
    return result


class EnhanceService:
    """OpenRouter chat-completions API로 보고서 필드를 다듬는 서비스입니다."""

    def __init__(self, config: Settings = None, client: Optional[httpx.Client] = None):
        """
        Args:
            config: API 키, 모델, base URL, 타임아웃 설정.
            client: 주입할 httpx.Client. 없으면 설정의 타임아웃으로 새로 만듭니다.
        """
        self.config = config or default_settings
        self.client = client or httpx.Client(timeout=httpx.Timeout(self.config.enhance_timeout_seconds))

    def enhance_fields(self, fields: Dict[str, Any]) -> Dict[str, str]:
        """
        필드 이름 -> 텍스트 매핑을 모델에 보내고, 다듬어진 매핑을 반환합니다.
        재시도는 하지 않으며, 실패는 즉시 EnhancementError로 전달됩니다.

        Raises:
            EnhancementError: API 키 미설정, 네트워크/HTTP 오류, 응답 형식 오류.
        """
        if not self.config.openrouter_api_key:
            raise EnhancementError("OPENROUTER_API_KEY is not configured.")

        payload = {
            "model": self.config.openrouter_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": json.dumps(fields)},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.config.openrouter_api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = self.client.post(
                f"{self.config.openrouter_base_url.rstrip('/')}/chat/completions",
                json=payload,
                headers=headers,
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except httpx.HTTPStatusError as e:
            logger.error("AI Error: %s %s", e.response.status_code, e.response.text)
            raise EnhancementError(f"Provider returned HTTP {e.response.status_code}.") from e
        except httpx.HTTPError as e:
            logger.error("AI Error: %s", e)
            raise EnhancementError(f"Provider request failed: {e}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("AI Error: unexpected response shape: %s", e)
            raise EnhancementError("Malformed response from provider.") from e

        if not isinstance(content, str):
            raise EnhancementError("Malformed response from provider.")

        try:
            enhanced = json.loads(strip_code_fence(content))
        except json.JSONDecodeError as e:
            logger.error("AI Error: non-JSON content: %s", content[:200])
            raise EnhancementError(f"Provider did not return valid JSON: {e}") from e

        return validate_enhanced_fields(fields, enhanced)

    def close(self):
        self.client.close()
