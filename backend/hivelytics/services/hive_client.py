from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx

from hivelytics.core.config import Settings
from hivelytics.utils.numbers import parse_int_prefix

LOGGER = logging.getLogger(__name__)


class HiveClientError(RuntimeError):
    pass


class HiveClient:
    """Read-only access to the condenser JSON-RPC API and the HAF history API.

    Every request is attempted once; failures surface as `HiveClientError`.
    """

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._request_id = 0

    async def __aenter__(self) -> 'HiveClient':
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=self._settings.hive_timeout_connect,
                read=self._settings.hive_timeout_read,
                write=10.0,
                pool=10.0,
            ),
            follow_redirects=True,
            headers={
                'User-Agent': self._settings.hive_user_agent,
                'Accept': 'application/json',
            },
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client is not None:
            await self._client.aclose()
        self._client = None

    async def get_account(self, name: str) -> dict[str, Any]:
        accounts = await self._rpc('condenser_api.get_accounts', [[name]])
        if not accounts:
            raise HiveClientError(f'Account not found: {name}')
        return accounts[0]

    async def get_global_properties(self) -> dict[str, Any]:
        return await self._rpc('condenser_api.get_dynamic_global_properties', [])

    async def get_vesting_delegations(self, name: str, limit: int | None = None) -> list[dict[str, Any]]:
        result = await self._rpc(
            'condenser_api.get_vesting_delegations',
            [name, '', limit or self._settings.delegations_limit],
        )
        return result or []

    async def get_follow_count(self, name: str) -> dict[str, Any]:
        result = await self._rpc('condenser_api.get_follow_count', [name])
        return result if isinstance(result, dict) else {}

    async def get_operations(
        self,
        name: str,
        *,
        from_block: int,
        operation_types: Iterable[int],
        max_pages: int,
    ) -> list[dict[str, Any]]:
        """Collect HAF operation rows page by page, up to `max_pages` or the last page."""
        client = self._require_client()
        url = f"{self._settings.hafah_base_url.rstrip('/')}/accounts/{name}/operations"
        types_param = ','.join(str(op_type) for op_type in operation_types)

        rows: list[dict[str, Any]] = []
        page = 1
        total_pages = 1
        while page <= total_pages and page <= max_pages:
            params = {
                'participation-mode': 'all',
                'operation-types': types_param,
                'page-size': self._settings.haf_page_size,
                'from-block': from_block,
                'page': page,
            }
            payload = await self._get_json(client, url, params)
            if not isinstance(payload, dict):
                raise HiveClientError(f'HAF endpoint {url} returned an unexpected payload')
            page_rows = payload.get('operations_result')
            if not isinstance(page_rows, list):
                page_rows = []
            rows.extend(page_rows)
            total_pages = _total_pages(payload.get('total_pages'), url)
            LOGGER.debug('HAF page %s/%s for %s: %s rows', page, total_pages, name, len(page_rows))
            page += 1
        return rows

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        client = self._require_client()
        self._request_id += 1
        body = {'jsonrpc': '2.0', 'method': method, 'params': params, 'id': self._request_id}
        try:
            response = await client.post(self._settings.hive_rpc_url, json=body)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.warning('Hive RPC %s failed: %s', method, exc)
            raise HiveClientError(f'Hive RPC {method} failed: {exc}') from exc

        if not isinstance(payload, dict):
            raise HiveClientError(f'Hive RPC {method} returned an unexpected payload')
        error = payload.get('error')
        if error:
            message = error.get('message') if isinstance(error, dict) else str(error)
            raise HiveClientError(f'Hive RPC {method} error: {message}')
        return payload.get('result')

    async def _get_json(self, client: httpx.AsyncClient, url: str, params: dict[str, Any]) -> Any:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.warning('HAF request %s failed: %s', url, exc)
            raise HiveClientError(f'Failed to fetch HAF endpoint {url}: {exc}') from exc

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise HiveClientError('HiveClient is not initialized')
        return self._client


def _total_pages(value: Any, url: str) -> int:
    if value is None:
        return 1
    if isinstance(value, int) and not isinstance(value, bool):
        return max(value, 1)
    parsed = parse_int_prefix(value) if isinstance(value, str) else None
    if parsed is None:
        raise HiveClientError(f'HAF endpoint {url} returned an invalid total_pages: {value!r}')
    return max(parsed, 1)
