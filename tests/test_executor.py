"""Tests for the route dispatch pipeline."""

import json

import pytest
from sanic.response import HTTPResponse, text

from larapipe.exceptions import BindingError, UnknownFilterError
from larapipe.routing import (
    FilterInvoker,
    FilterRegistry,
    PatternFilterResolver,
    Route,
    RouteExecutor,
)


@pytest.fixture
def registry():
    return FilterRegistry()


@pytest.fixture
def patterns():
    return PatternFilterResolver()


@pytest.fixture
def executor(registry, patterns):
    return RouteExecutor(registry, patterns)


def recorder(calls, name, result=None):
    def record(route, request, *extra):
        calls.append((name, extra))
        return result
    return record


class TestHandlerPath:
    async def test_handler_and_after_filters_run_once(self, executor, registry, calls, make_request):
        registry.register('log', recorder(calls, 'log'))
        registry.register('etag', recorder(calls, 'etag'))

        def handler():
            calls.append(('handler', ()))
            return 'ok'

        route = Route(['GET'], '/', handler).after('log', 'etag')
        response = await executor.run(route, make_request('/'))

        assert [name for name, _ in calls] == ['handler', 'log', 'etag']
        assert response.body == b'ok'

    async def test_handler_receives_positional_arguments(self, executor, make_request):
        route = Route(['GET'], '/teams/{team}/users/{user}', lambda team, user: f'{team}:{user}')
        response = await executor.run(route, make_request('/teams/red/users/ann'), {'user': 'ann', 'team': 'red'})
        assert response.body == b'red:ann'

    async def test_async_handler_awaited(self, executor, make_request):
        async def handler(id):
            return {'id': id}

        route = Route(['GET'], '/users/{id}', handler)
        response = await executor.run(route, make_request('/users/9'), {'id': 9})
        assert json.loads(response.body) == {'id': 9}

    async def test_accepts_bound_route(self, executor, make_request):
        route = Route(['GET'], '/posts/{page?}', lambda page: str(page)).defaults('page', 1)
        response = await executor.run(route.bind({}), make_request('/posts'))
        assert response.body == b'1'


class TestBeforeFilters:
    async def test_order_is_route_filters_then_pattern_filters(self, executor, registry, patterns, calls, make_request):
        for name in ('auth', 'log', 'csrf', 'throttle'):
            registry.register(name, recorder(calls, name))
        patterns.when('*', 'csrf|throttle')

        route = Route(['GET'], '/users', lambda: 'ok').before('auth', 'log')
        await executor.run(route, make_request('/users'))

        assert [name for name, _ in calls] == ['auth', 'log', 'csrf', 'throttle']
        assert all(extra == () for _, extra in calls)

    async def test_every_before_filter_runs_even_after_a_result(self, executor, registry, patterns, calls, make_request):
        registry.register('auth', recorder(calls, 'auth', 'login required'))
        registry.register('log', recorder(calls, 'log'))
        patterns.when('*', 'csrf')
        registry.register('csrf', recorder(calls, 'csrf'))

        handler_calls = []
        route = Route(['GET'], '/', lambda: handler_calls.append(1)).before('auth', 'log')
        response = await executor.run(route, make_request('/'))

        assert [name for name, _ in calls] == ['auth', 'log', 'csrf']
        assert handler_calls == []
        assert response.body == b'login required'

    async def test_last_non_none_result_wins(self, executor, registry, make_request):
        registry.register('first', lambda route, request: 'first')
        registry.register('second', lambda route, request: 'second')
        registry.register('quiet', lambda route, request: None)

        route = Route(['GET'], '/', lambda: 'handler').before('first', 'second', 'quiet')
        response = await executor.run(route, make_request('/'))

        assert response.body == b'second'

    async def test_pattern_filter_can_short_circuit(self, executor, registry, patterns, make_request):
        registry.register('auth', lambda route, request: None)
        registry.register('csrf', lambda route, request: 'blocked')
        patterns.when('*', 'csrf')

        handler_calls = []

        def handler():
            handler_calls.append(1)
            return 'ok'

        route = Route(['POST'], '/form', handler).before('auth')
        response = await executor.run(route, make_request('/form', 'POST'))

        assert handler_calls == []
        assert response.body == b'blocked'

    async def test_handler_runs_when_filters_pass(self, executor, registry, patterns, make_request):
        registry.register('auth', lambda route, request: None)
        registry.register('csrf', lambda route, request: None)
        patterns.when('*', 'csrf')

        route = Route(['POST'], '/form', lambda: 'ok').before('auth')
        response = await executor.run(route, make_request('/form', 'POST'))

        assert response.body == b'ok'

    async def test_short_circuit_still_runs_after_filters(self, executor, registry, calls, make_request):
        registry.register('auth', lambda route, request: 'denied')
        registry.register('log', recorder(calls, 'log'))

        route = Route(['GET'], '/', lambda: 'ok').before('auth').after('log')
        response = await executor.run(route, make_request('/'))

        assert calls == [('log', (response,))]

    async def test_filters_receive_bound_route_and_request(self, executor, registry, make_request):
        seen = []
        registry.register('spy', lambda route, request: seen.append((route, request)))

        route = Route(['GET'], '/users/{id}', lambda id: id).before('spy')
        request = make_request('/users/5')
        await executor.run(route, request, {'id': '5'})

        bound, received_request = seen[0]
        assert bound.route is route
        assert bound.get_parameter('id') == '5'
        assert received_request is request

    async def test_response_object_from_filter_passed_through(self, executor, registry, make_request):
        denied = text('forbidden', status=403)
        registry.register('auth', lambda route, request: denied)

        route = Route(['GET'], '/', lambda: 'ok').before('auth')
        assert await executor.run(route, make_request('/')) is denied

    async def test_get_all_before_filters(self, executor, patterns, make_request):
        patterns.when('admin/*', 'auth')
        bound = Route(['GET'], '/admin/x', lambda: 'ok').before('log', 'auth').bind()
        assert executor.get_all_before_filters(bound, make_request('/admin/x')) == ['log', 'auth', 'auth']


class TestAfterFilters:
    async def test_only_route_after_filters_run(self, executor, registry, patterns, calls, make_request):
        registry.register('log', recorder(calls, 'log'))
        registry.register('global', recorder(calls, 'global'))
        patterns.when('*', 'global')

        route = Route(['GET'], '/', lambda: 'ok').after('log')
        await executor.run(route, make_request('/'))

        # 'global' runs as a before filter only
        assert [(name, len(extra)) for name, extra in calls] == [('global', 0), ('log', 1)]

    async def test_each_after_filter_gets_same_response(self, executor, registry, make_request):
        seen = []

        def tag(route, request, response):
            response.headers['X-Tag'] = 'yes'
            seen.append(response)
            return 'ignored'

        def check(route, request, response):
            seen.append(response)
            return text('replacement')

        registry.register('tag', tag)
        registry.register('check', check)

        route = Route(['GET'], '/', lambda: 'ok').after('tag', 'check')
        response = await executor.run(route, make_request('/'))

        assert seen[0] is response
        assert seen[1] is response
        assert response.body == b'ok'
        assert response.headers['X-Tag'] == 'yes'

    async def test_async_after_filter_awaited(self, executor, registry, make_request):
        async def header(route, request, response):
            response.headers['X-Async'] = '1'

        registry.register('header', header)
        route = Route(['GET'], '/', lambda: 'ok').after('header')
        response = await executor.run(route, make_request('/'))
        assert response.headers['X-Async'] == '1'


class TestErrors:
    async def test_binding_error_before_any_filter(self, executor, registry, calls, make_request):
        registry.register('auth', recorder(calls, 'auth'))
        route = Route(['GET'], '/users/{id}', lambda id: id).before('auth')

        with pytest.raises(BindingError):
            await executor.run(route, make_request('/users'), {})
        assert calls == []

    async def test_handler_error_propagates_and_skips_after_filters(self, executor, registry, calls, make_request):
        registry.register('log', recorder(calls, 'log'))

        def handler():
            raise ValueError('boom')

        route = Route(['GET'], '/', handler).after('log')
        with pytest.raises(ValueError, match='boom'):
            await executor.run(route, make_request('/'))
        assert calls == []

    async def test_filter_error_propagates(self, executor, registry, make_request):
        def auth(route, request):
            raise PermissionError('no session')

        registry.register('auth', auth)
        route = Route(['GET'], '/', lambda: 'ok').before('auth')
        with pytest.raises(PermissionError):
            await executor.run(route, make_request('/'))

    async def test_unknown_filter_skipped_by_default(self, executor, make_request):
        route = Route(['GET'], '/', lambda: 'ok').before('typo').after('also-typo')
        response = await executor.run(route, make_request('/'))
        assert response.body == b'ok'

    async def test_unknown_filter_aborts_in_strict_mode(self, registry, patterns, make_request):
        executor = RouteExecutor(registry, patterns, invoker=FilterInvoker(registry, strict=True))
        handler_calls = []
        route = Route(['GET'], '/', lambda: handler_calls.append(1)).before('typo')

        with pytest.raises(UnknownFilterError):
            await executor.run(route, make_request('/'))
        assert handler_calls == []


class TestNormalization:
    async def test_none_handler_result_gives_empty_response(self, executor, make_request):
        response = await executor.run(Route(['GET'], '/', lambda: None), make_request('/'))
        assert isinstance(response, HTTPResponse)
        assert response.status == 200
        assert response.body == b''

    async def test_dict_result_is_json(self, executor, make_request):
        response = await executor.run(Route(['GET'], '/', lambda: {'ok': True}), make_request('/'))
        assert response.content_type == 'application/json'
        assert json.loads(response.body) == {'ok': True}


class TestFilterForms:
    async def test_filter_class_and_list_registration_dispatch(self, executor, registry, calls, make_request):
        class AuthFilter:
            def filter(self, route, request):
                calls.append(('auth', ()))
                return None

        registry.register('auth', AuthFilter)
        registry.register('csrf', recorder(calls, 'csrf'))

        route = Route(['GET'], '/', lambda: 'ok').before(['auth', 'csrf'])
        response = await executor.run(route, make_request('/'))

        assert [name for name, _ in calls] == ['auth', 'csrf']
        assert response.body == b'ok'

    async def test_registry_follows_supplied_invoker(self, registry, patterns):
        other = FilterRegistry()
        executor = RouteExecutor(registry, patterns, invoker=FilterInvoker(other))
        assert executor.registry is other
