import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"


class DraftsApiClient:
    """Status Drafter REST API를 호출하는 HTTP 클라이언트입니다."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, client: Optional[httpx.Client] = None):
        self.client = client or httpx.Client(base_url=base_url, timeout=httpx.Timeout(30.0))

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """
        요청을 보내고 응답 JSON을 그대로 반환합니다.
        네트워크 오류나 JSON이 아닌 응답은 {"error": ...} 형태로 바꿔 돌려주므로
        호출자는 예외 대신 응답의 error 키만 확인하면 됩니다.
        """
        try:
            response = self.client.request(method, path, **kwargs)
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("%s %s failed: %s", method, path, e)
            return {"error": str(e)}

    # --- Drafts ---

    def save_draft(self, type: str, content: str, project_id: Optional[int] = None,
                   role_id: Optional[int] = None) -> Dict[str, Any]:
        return self._request("POST", "/drafts", json={
            "type": type, "content": content, "project_id": project_id, "role_id": role_id,
        })

    def get_history(self, limit: int = 10) -> Dict[str, Any]:
        result = self._request("GET", "/drafts", params={"limit": limit})
        if "error" in result:
            result.setdefault("data", [])
        return result

    def delete_draft(self, draft_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/drafts/{draft_id}")

    # --- Projects & Roles ---

    def get_projects(self) -> Dict[str, Any]:
        return self._request("GET", "/projects")

    def create_project(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/projects", json={"name": name})

    def delete_project(self, project_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/projects/{project_id}")

    def get_roles(self, project_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/projects/{project_id}/roles")

    def create_role(self, name: str, project_id: int) -> Dict[str, Any]:
        return self._request("POST", "/roles", json={"name": name, "project_id": project_id})

    def delete_role(self, role_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/roles/{role_id}")

    # --- AI Enhance ---

    def enhance_fields(self, fields: Dict[str, str]) -> Optional[Dict[str, str]]:
        """다듬어진 필드 매핑을 반환합니다. 실패하면 None."""
        result = self._request("POST", "/enhance", json={"fields": fields})
        if "error" in result:
            logger.error("AI Error: %s", result.get("details", result["error"]))
            return None
        return result.get("enhanced")

    def close(self):
        self.client.close()
