from typing import Any, Dict, List, Optional

import requests


class ApiError(Exception):
    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class PromptGardenClient:
    """HTTP client for the Prompt Garden v1 API.

    Unwraps the {"code", "data"} envelope and raises ApiError on any
    non-2xx response.
    """

    def __init__(self, base_url: str = 'http://127.0.0.1:5000/api/v1', timeout: int = 15):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _call(self, method: str, path: str, **kwargs) -> Any:
        resp = requests.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not resp.ok:
            message = body.get('error') if isinstance(body, dict) else None
            raise ApiError(message or 'An error occurred while processing your request', resp.status_code)
        return body.get('data') if isinstance(body, dict) else body

    def initialize_database(self) -> Dict[str, Any]:
        return self._call('GET', '/setup')

    def get_all_prompts(self) -> List[Dict[str, Any]]:
        return self._call('GET', '/prompts')

    def search_prompts(self, query: str) -> List[Dict[str, Any]]:
        return self._call('GET', '/prompts', params={'q': query})

    def get_prompts_by_tag(self, tag: str) -> List[Dict[str, Any]]:
        return self._call('GET', '/prompts', params={'tag': tag})

    def get_prompt(self, prompt_id: str) -> Dict[str, Any]:
        return self._call('GET', f'/prompts/{prompt_id}')

    def add_prompt(self, content: str, title: str = '', tags: Optional[List[str]] = None,
                   category: Optional[str] = None) -> Dict[str, Any]:
        payload = {'title': title, 'content': content, 'tags': tags or []}
        if category:
            payload['category'] = category
        return self._call('POST', '/prompts', json=payload)

    def update_prompt(self, prompt_id: str, **fields) -> Dict[str, Any]:
        return self._call('PUT', f'/prompts/{prompt_id}', json=fields)

    def delete_prompt(self, prompt_id: str) -> Dict[str, Any]:
        return self._call('DELETE', f'/prompts/{prompt_id}')

    def get_sections(self, prompt_id: str) -> Dict[str, Any]:
        return self._call('GET', f'/prompts/{prompt_id}/sections')

    def get_remix(self, prompt_id: str) -> Dict[str, Any]:
        return self._call('GET', f'/prompts/{prompt_id}/remix')

    def get_all_tags(self) -> List[Dict[str, Any]]:
        return self._call('GET', '/tags')

    def get_all_categories(self) -> List[str]:
        return self._call('GET', '/categories')

    def parse_annotations(self, content: str) -> Dict[str, Any]:
        return self._call('POST', '/annotations/parse', json={'content': content})

    def fill_variables(self, content: str, values: Dict[str, str]) -> Dict[str, Any]:
        return self._call('POST', '/annotations/fill', json={'content': content, 'values': values})
