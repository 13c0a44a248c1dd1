from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from hivelytics.core.config import get_settings
from hivelytics.services.hive_client import HiveClient, HiveClientError


def _settings(**overrides):
    return get_settings().model_copy(update=overrides)


def _rpc_handler(results: dict[str, object], calls: list[dict]):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        calls.append(body)
        method = body['method']
        if method not in results:
            return httpx.Response(200, json={'jsonrpc': '2.0', 'id': body['id'], 'error': {'message': 'unknown method'}})
        return httpx.Response(200, json={'jsonrpc': '2.0', 'id': body['id'], 'result': results[method]})

    return handler


async def _call(transport: httpx.MockTransport, coro_factory, **overrides):
    async with HiveClient(_settings(**overrides), transport=transport) as client:
        return await coro_factory(client)


def test_get_account_posts_jsonrpc_request() -> None:
    calls: list[dict] = []
    transport = httpx.MockTransport(
        _rpc_handler({'condenser_api.get_accounts': [{'name': 'alice'}]}, calls)
    )
    account = asyncio.run(_call(transport, lambda client: client.get_account('alice')))

    assert account == {'name': 'alice'}
    assert calls[0]['method'] == 'condenser_api.get_accounts'
    assert calls[0]['params'] == [['alice']]
    assert calls[0]['jsonrpc'] == '2.0'


def test_missing_account_raises() -> None:
    transport = httpx.MockTransport(_rpc_handler({'condenser_api.get_accounts': []}, []))
    with pytest.raises(HiveClientError, match='Account not found'):
        asyncio.run(_call(transport, lambda client: client.get_account('ghost')))


def test_rpc_error_payload_raises() -> None:
    transport = httpx.MockTransport(_rpc_handler({}, []))
    with pytest.raises(HiveClientError, match='unknown method'):
        asyncio.run(_call(transport, lambda client: client.get_global_properties()))


def test_http_failure_raises() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text='busy'))
    with pytest.raises(HiveClientError):
        asyncio.run(_call(transport, lambda client: client.get_global_properties()))


def test_delegations_use_configured_limit() -> None:
    calls: list[dict] = []
    transport = httpx.MockTransport(
        _rpc_handler({'condenser_api.get_vesting_delegations': [{'delegatee': 'bob'}]}, calls)
    )
    rows = asyncio.run(
        _call(transport, lambda client: client.get_vesting_delegations('alice'), delegations_limit=7)
    )
    assert rows == [{'delegatee': 'bob'}]
    assert calls[0]['params'] == ['alice', '', 7]


def test_get_operations_paginates_until_total_pages() -> None:
    seen_params: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        seen_params.append(params)
        page = int(params['page'])
        return httpx.Response(
            200,
            json={
                'total_operations': 3,
                'total_pages': 3,
                'operations_result': [{'block': page, 'op': {'type': 'x', 'value': {}}}],
            },
        )

    rows = asyncio.run(
        _call(
            httpx.MockTransport(handler),
            lambda client: client.get_operations('alice', from_block=123, operation_types=(51, 52), max_pages=10),
            hafah_base_url='https://haf.example/hafah-api/',
        )
    )

    assert [row['block'] for row in rows] == [1, 2, 3]
    assert seen_params[0]['operation-types'] == '51,52'
    assert seen_params[0]['from-block'] == '123'
    assert seen_params[0]['participation-mode'] == 'all'
    assert seen_params[0]['page-size'] == '100'


def test_get_operations_respects_max_pages() -> None:
    pages: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == '/hafah-api/accounts/alice/operations'
        pages.append(int(request.url.params['page']))
        return httpx.Response(200, json={'total_pages': 50, 'operations_result': []})

    asyncio.run(
        _call(
            httpx.MockTransport(handler),
            lambda client: client.get_operations('alice', from_block=0, operation_types=(72,), max_pages=2),
            hafah_base_url='https://haf.example/hafah-api',
        )
    )
    assert pages == [1, 2]


def test_client_requires_context_manager() -> None:
    client = HiveClient(_settings())
    with pytest.raises(HiveClientError, match='not initialized'):
        asyncio.run(client.get_global_properties())


def test_get_operations_rejects_malformed_total_pages() -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={'total_pages': 'n/a', 'operations_result': []})
    )
    with pytest.raises(HiveClientError, match='total_pages'):
        asyncio.run(
            _call(transport, lambda client: client.get_operations('alice', from_block=0, operation_types=(72,), max_pages=3))
        )


def test_get_operations_rejects_non_object_page() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=['not', 'a', 'page']))
    with pytest.raises(HiveClientError, match='unexpected payload'):
        asyncio.run(
            _call(transport, lambda client: client.get_operations('alice', from_block=0, operation_types=(72,), max_pages=3))
        )


def test_get_operations_accepts_numeric_string_total_pages() -> None:
    pages: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        pages.append(int(request.url.params['page']))
        return httpx.Response(200, json={'total_pages': '2', 'operations_result': [{'block': 1}]})

    rows = asyncio.run(
        _call(
            httpx.MockTransport(handler),
            lambda client: client.get_operations('alice', from_block=0, operation_types=(72,), max_pages=5),
        )
    )
    assert pages == [1, 2]
    assert len(rows) == 2


def test_get_follow_count() -> None:
    calls: list[dict] = []
    transport = httpx.MockTransport(
        _rpc_handler({'condenser_api.get_follow_count': {'follower_count': 3, 'following_count': 4}}, calls)
    )
    counts = asyncio.run(_call(transport, lambda client: client.get_follow_count('alice')))
    assert counts == {'follower_count': 3, 'following_count': 4}
    assert calls[0]['params'] == ['alice']
