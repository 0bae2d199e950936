"""
Async HTTP client for the RECON backend API.

Unwraps the `{ data }` envelope on success and raises ApiClientError with
the server's `{ error: { message, code } }` on any non-2xx response.
"""

import logging
import aiohttp
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .session import SessionStore
from .transcripts import TranscriptCache

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Raised for any non-2xx API response."""

    def __init__(self, message: str, status: int, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code

    @property
    def is_validation_error(self) -> bool:
        return self.code == "VALIDATION_ERROR"


def route_safe_public_id(public_id: str) -> str:
    """Image ids contain "/"; the delete route expects "~" instead."""
    return public_id.replace("/", "~")


class ApiClient:
    """
    Client for the RECON REST API.

    Usage:
        client = ApiClient("https://api.example.com", SessionStore("~/.recon/session.json"))
        await client.login("a@b.com", "secret")
        services = await client.list_services(search="roof")
    """

    def __init__(
        self,
        base_url: str,
        session_store: Optional[SessionStore] = None,
        transcripts: Optional[TranscriptCache] = None,
        timeout: float = 30
    ):
        self.base_url = base_url.rstrip("/")
        self.session_store = session_store
        self.transcripts = transcripts
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    def _headers(self, auth: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if auth and self.session_store is not None:
            token = self.session_store.access_token
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        data: Any = None,
        auth: bool = True
    ) -> Any:
        """
        Send one request and return the unwrapped `data` payload.

        Raises:
            ApiClientError: On any non-2xx status
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.request(
                method, url, json=json, params=clean_params or None,
                data=data, headers=self._headers(auth)
            ) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None

                if not 200 <= response.status < 300:
                    error = (body or {}).get("error") if isinstance(body, dict) else None
                    if isinstance(error, dict):
                        message, code = error.get("message", "Request failed"), error.get("code")
                    else:
                        message, code = (error or f"Request failed with status {response.status}"), None
                    logger.warning(f"{method} {path} failed ({response.status}): {message}")
                    raise ApiClientError(message, response.status, code)

                if isinstance(body, dict) and "data" in body:
                    return body["data"]
                return body

    # -- auth -------------------------------------------------------------

    async def health(self) -> Dict:
        return await self.request("GET", "/health", auth=False)

    async def register(self, email: str, password: str, full_name: str) -> Dict:
        return await self.request(
            "POST", "/auth/register",
            json={"email": email, "password": password, "full_name": full_name},
            auth=False,
        )

    async def login(self, email: str, password: str) -> Dict:
        """Sign in, then store session and profile for later calls and role guards."""
        result = await self.request(
            "POST", "/auth/login", json={"email": email, "password": password}, auth=False
        )
        if self.session_store is not None:
            self.session_store.save({"user": result.get("user"), "session": result.get("session")})
            me = await self.me()
            self.session_store.save({
                "user": result.get("user"),
                "session": result.get("session"),
                "profile": me.get("profile"),
            })
        return result

    def logout(self) -> None:
        if self.session_store is not None:
            self.session_store.clear()

    async def me(self) -> Dict:
        return await self.request("GET", "/auth/me")

    # -- services ---------------------------------------------------------

    async def list_services(
        self, search: Optional[str] = None, category: Optional[str] = None, active: Optional[bool] = None
    ) -> List[Dict]:
        params = {
            "search": search,
            "category": category,
            "active": None if active is None else str(active).lower(),
        }
        return await self.request("GET", "/services", params=params, auth=False)

    async def get_service(self, service_id: str) -> Dict:
        return await self.request("GET", f"/services/{service_id}", auth=False)

    async def create_service(self, **fields) -> Dict:
        return await self.request("POST", "/services", json=fields)

    async def update_service(self, service_id: str, **fields) -> Dict:
        return await self.request("PUT", f"/services/{service_id}", json=fields)

    async def delete_service(self, service_id: str) -> Dict:
        return await self.request("DELETE", f"/services/{service_id}")

    # -- projects ---------------------------------------------------------

    async def list_projects(self, **filters) -> List[Dict]:
        return await self.request("GET", "/projects", params=filters, auth=False)

    async def get_project(self, project_id: str) -> Dict:
        return await self.request("GET", f"/projects/{project_id}", auth=False)

    async def create_project(self, **fields) -> Dict:
        return await self.request("POST", "/projects", json=fields)

    async def update_project(self, project_id: str, **fields) -> Dict:
        return await self.request("PUT", f"/projects/{project_id}", json=fields)

    async def delete_project(self, project_id: str) -> Dict:
        return await self.request("DELETE", f"/projects/{project_id}")

    # -- consultations ----------------------------------------------------

    async def submit_consultation(self, **fields) -> Dict:
        return await self.request("POST", "/consultations", json=fields)

    async def list_consultations(
        self,
        statuses: Optional[Iterable[str]] = None,
        search: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None
    ) -> List[Dict]:
        params = {
            "status": ",".join(statuses) if statuses else None,
            "search": search,
            "from_date": from_date,
            "to_date": to_date,
        }
        return await self.request("GET", "/consultations", params=params)

    async def update_consultation_status(self, consultation_id: str, status: str) -> Dict:
        return await self.request("PATCH", f"/consultations/{consultation_id}", json={"status": status})

    async def my_consultations(self) -> List[Dict]:
        return await self.request("GET", "/consultations/my")

    # -- appointments -----------------------------------------------------

    async def create_appointment(self, service: str, preferred_date: str, location: Optional[str] = None) -> Dict:
        body = {"service": service, "preferred_date": preferred_date}
        if location is not None:
            body["location"] = location
        return await self.request("POST", "/appointments", json=body)

    async def my_appointments(self) -> List[Dict]:
        return await self.request("GET", "/appointments/my")

    async def list_appointments(self, statuses: Optional[Iterable[str]] = None) -> List[Dict]:
        params = {"status": ",".join(statuses) if statuses else None}
        return await self.request("GET", "/appointments", params=params)

    async def update_appointment_status(self, appointment_id: str, status: str) -> Dict:
        return await self.request("PATCH", f"/appointments/{appointment_id}", json={"status": status})

    # -- assistant --------------------------------------------------------

    async def ask(self, question: str) -> Dict:
        return await self.request("POST", "/ai/ask", json={"question": question}, auth=False)

    async def chat(self, message: str, user_id: Optional[str] = None) -> str:
        """
        Send a chat message, carrying the cached transcript when available.

        The reply is appended to the transcript so the next call continues
        the same conversation.
        """
        owner = user_id or (self.session_store.user_id if self.session_store else None) or "anonymous"
        history = self.transcripts.load(owner) if self.transcripts else []
        outgoing = history + [{"role": "user", "content": message}]

        result = await self.request("POST", "/ai/chat", json={"messages": outgoing}, auth=False)
        reply = result.get("response", "")

        if self.transcripts is not None:
            self.transcripts.save(owner, outgoing + [{"role": "assistant", "content": reply}])
        return reply

    # -- uploads ----------------------------------------------------------

    async def upload_image(self, content: bytes, filename: str, content_type: str) -> Dict:
        form = aiohttp.FormData()
        form.add_field("image", content, filename=filename, content_type=content_type)
        return await self.request("POST", "/upload/image", data=form)

    async def upload_images(self, files: Iterable[Tuple[bytes, str, str]]) -> Dict:
        """Upload several (content, filename, content_type) tuples in one request."""
        form = aiohttp.FormData()
        for content, filename, content_type in files:
            form.add_field("images", content, filename=filename, content_type=content_type)
        return await self.request("POST", "/upload/images", data=form)

    async def delete_image(self, public_id: str) -> Dict:
        return await self.request("DELETE", f"/upload/image/{route_safe_public_id(public_id)}")

    # -- analytics --------------------------------------------------------

    async def stats(self) -> Dict:
        return await self.request("GET", "/analytics/stats")

    async def trends(self) -> Dict:
        return await self.request("GET", "/analytics/trends")

    async def popular_services(self) -> List[Dict]:
        return await self.request("GET", "/analytics/popular-services")
