from collections import namedtuple
from io import BytesIO
from urllib.parse import parse_qsl, urlencode

from oauthlib import oauth1
from twisted.internet import error as ierror
from twisted.internet import reactor
from twisted.logger import Logger
from twisted.web.client import (
    Agent, FileBodyProducer, PartialDownloadError, ResponseFailed, readBody)
from twisted.web.http_headers import Headers

from txtwitcall.error import (
    AuthorizationDenied, LoginNotStarted, TransportFailure)
from txtwitcall.objects import AccessToken, ApiResponse, parse_object


log = Logger()


OAuthEndpoints = namedtuple(
    'OAuthEndpoints', ['request_token', 'authorize', 'access_token'])

TWITTER_OAUTH_ENDPOINTS = OAuthEndpoints(
    request_token='https://api.twitter.com/oauth/request_token',
    authorize='https://api.twitter.com/oauth/authorize',
    access_token='https://api.twitter.com/oauth/access_token',
)

# Methods that carry their parameters in the query string.
QUERY_METHODS = ('GET', 'HEAD', 'DELETE')

NETWORK_ERRORS = (
    ierror.ConnectError, ierror.ConnectionLost, ierror.DNSLookupError,
    ResponseFailed)

UNAUTHENTICATED = 'unauthenticated'
REQUEST_TOKEN_OBTAINED = 'request_token_obtained'
AUTHENTICATED = 'authenticated'


def _extract_partial_response(failure):
    failure.trap(PartialDownloadError)
    return failure.value.response


def _read_body(response):
    """
    Read a response body even if there is no content length.
    """
    return readBody(response).addErrback(_extract_partial_response)


def _response_headers(response):
    return dict(
        (k.decode('latin-1').lower(), b', '.join(v).decode('latin-1'))
        for k, v in response.headers.getAllRawHeaders())


def _status_line(response):
    proto, major, minor = response.version
    return '%s/%d.%d %d %s' % (
        proto.decode('ascii'), major, minor, response.code,
        response.phrase.decode('latin-1'))


def _is_success(code):
    return 200 <= code < 300


class OAuthTransport(object):
    """
    Signs requests with OAuth 1.0a and sends them with a Twisted ``Agent``.

    The consumer key and secret are fixed for the lifetime of the transport.
    The access token changes only when :meth:`access_token` completes a
    token exchange.
    """
    reactor = reactor

    def __init__(self, consumer_key, consumer_secret, token_key=None,
                 token_secret=None, endpoints=TWITTER_OAUTH_ENDPOINTS,
                 agent=None):
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._token_key = token_key
        self._token_secret = token_secret
        self._request_token = None
        self._endpoints = endpoints
        if agent is None:
            agent = Agent(self.reactor)
        self._agent = agent

    @property
    def consumer_key(self):
        return self._consumer_key

    @property
    def has_access_token(self):
        return self._token_key is not None and self._token_secret is not None

    @property
    def has_request_token(self):
        return self._request_token is not None

    def _client(self, **kw):
        return oauth1.Client(
            self._consumer_key, client_secret=self._consumer_secret,
            encoding='utf-8', decoding='utf-8', **kw)

    def _sign(self, client, method, uri, params=None):
        headers = {}
        body = None
        if params and method in QUERY_METHODS:
            uri = '%s?%s' % (uri, urlencode(params))
        elif params:
            headers = {
                'Content-Type': 'application/x-www-form-urlencoded',
            }
            body = urlencode(params)
        return client.sign(uri, http_method=method, headers=headers, body=body)

    def _send(self, method, uri, headers, body):
        headers = Headers(dict((k, [v]) for k, v in headers.items()))

        body_producer = None
        if body is not None:
            body_producer = FileBodyProducer(BytesIO(body))

        d = self._agent.request(
            method.encode('ascii'), uri, headers, body_producer)
        d.addCallback(self._read_response)
        d.addErrback(self._handle_network_error, uri.decode('utf-8'))
        return d

    def _read_response(self, response):
        return _read_body(response).addCallback(lambda body: (
            response.code, _response_headers(response),
            _status_line(response), body))

    def _handle_network_error(self, failure, uri):
        failure.trap(*NETWORK_ERRORS)
        log.warn(
            "Request to {uri} failed: {error}", uri=uri,
            error=failure.getErrorMessage())
        raise TransportFailure(uri, failure)

    def _parse_token(self, response, endpoint):
        code, _headers, status_line, body = response
        token = {}
        if _is_success(code):
            token = dict(parse_qsl(body.decode('utf-8', 'replace')))
        if 'oauth_token' not in token or 'oauth_token_secret' not in token:
            log.warn(
                "Token request to {endpoint} rejected: {status_line}",
                endpoint=endpoint, status_line=status_line)
            raise AuthorizationDenied(code, None, body)
        return token

    def perform_request(self, method, uri, params=None):
        """
        Make a signed request.

        :param str method: The HTTP method.

        :param str uri: The full request URI, without a query string.

        :param dict params:
            String parameters. These are sent in the query string for
            ``GET``, ``HEAD`` and ``DELETE`` requests and as a form-encoded
            body for everything else.

        :returns:
            A Deferred that fires with ``(code, headers, status_line, body)``
            for any HTTP response, or fails with
            :class:`~txtwitcall.error.TransportFailure`.
        """
        method = method.upper()
        client = self._client(
            resource_owner_key=self._token_key,
            resource_owner_secret=self._token_secret)
        uri, headers, body = self._sign(client, method, uri, params)
        log.debug(
            "{method} {uri}", method=method, uri=uri.decode('utf-8'))
        return self._send(method, uri, headers, body)

    def request_token(self, callback='oob'):
        """
        Fetch a temporary request token.

        :returns:
            A Deferred that fires with ``(token, auth_header)``, where
            ``token`` is the decoded token response and ``auth_header`` is the
            ``Authorization`` header sent with the request.
        """
        client = self._client(callback_uri=callback)
        uri, headers, body = self._sign(
            client, 'POST', self._endpoints.request_token)
        auth_header = headers[b'Authorization'].decode('utf-8')

        d = self._send('POST', uri, headers, body)
        d.addCallback(self._parse_token, self._endpoints.request_token)
        d.addCallback(self._set_request_token)
        return d.addCallback(lambda token: (token, auth_header))

    def _set_request_token(self, token):
        self._request_token = (
            token['oauth_token'], token['oauth_token_secret'])
        return token

    def authorization_url(self):
        """
        Build the URL the user must visit to authorize the request token.
        """
        if self._request_token is None:
            raise LoginNotStarted("No request token to authorize.")
        return '%s?%s' % (self._endpoints.authorize, urlencode({
            'oauth_token': self._request_token[0],
        }))

    def access_token(self, verifier):
        """
        Exchange the request token and ``verifier`` for an access token.

        On success the access token is used to sign all further requests.

        :returns:
            A Deferred that fires with ``(token, code, headers, status_line)``
            or fails with :class:`~txtwitcall.error.AuthorizationDenied` if
            the server rejects the verifier.
        """
        if self._request_token is None:
            raise LoginNotStarted("No request token to exchange.")
        key, secret = self._request_token
        client = self._client(
            resource_owner_key=key, resource_owner_secret=secret,
            verifier=verifier)
        uri, headers, body = self._sign(
            client, 'POST', self._endpoints.access_token)

        d = self._send('POST', uri, headers, body)
        return d.addCallback(self._set_access_token)

    def _set_access_token(self, response):
        code, headers, status_line, _body = response
        token = self._parse_token(response, self._endpoints.access_token)
        self._token_key = token['oauth_token']
        self._token_secret = token['oauth_token_secret']
        self._request_token = None
        return token, code, headers, status_line


class OAuthFlow(object):
    """
    The three-legged OAuth login sequence for out-of-band (PIN) clients.

    The state moves from ``UNAUTHENTICATED`` to ``REQUEST_TOKEN_OBTAINED``
    when :meth:`start_login` succeeds and from there to ``AUTHENTICATED``
    when :meth:`confirm_login` succeeds. A failed step leaves the state
    where it was.
    """
    def __init__(self, transport):
        self.transport = transport
        if transport.has_access_token:
            self.state = AUTHENTICATED
        else:
            self.state = UNAUTHENTICATED

    def _set_state(self, state):
        log.info(
            "OAuth state {old} -> {new}", old=self.state, new=state)
        self.state = state

    def start_login(self):
        """
        Fetch a request token and build the authorization URL.

        :returns:
            A Deferred that fires with ``(authorization_url, auth_header)``.
        """
        d = self.transport.request_token(callback='oob')
        return d.addCallback(self._request_token_obtained)

    def _request_token_obtained(self, result):
        _token, auth_header = result
        self._set_state(REQUEST_TOKEN_OBTAINED)
        return self.transport.authorization_url(), auth_header

    def confirm_login(self, pin):
        """
        Exchange the PIN shown to the user for an access token.

        :returns:
            A Deferred that fires with an
            :class:`~txtwitcall.objects.ApiResponse` whose ``data`` is an
            :class:`~txtwitcall.objects.AccessToken`.
        """
        if self.state != REQUEST_TOKEN_OBTAINED:
            raise LoginNotStarted(
                "confirm_login() called before start_login() succeeded.")
        d = self.transport.access_token(str(pin))
        return d.addCallback(self._access_token_obtained)

    def _access_token_obtained(self, result):
        token, code, headers, status_line = result
        self._set_state(AUTHENTICATED)
        return ApiResponse(
            parse_object(AccessToken.kind, token), status_line, code, headers)
