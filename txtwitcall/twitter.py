import json
import re

from twisted.logger import Logger

from txtwitcall.error import (
    InvalidArgumentShape, MissingPathArgument, MissingRequiredArgument,
    NonScalarArgument, UnknownArgument)
from txtwitcall.keys import OAUTH_KEY_RULES
from txtwitcall.oauth import (
    TWITTER_OAUTH_ENDPOINTS, OAuthFlow, OAuthTransport)
from txtwitcall.objects import ApiResponse
from txtwitcall.resources import (
    RESOURCES, ResourceDeclaration, load_resources)


log = Logger()


TWITTER_API_URL = 'https://api.twitter.com/1.1/'

SCALAR_TYPES = (str, int, float, bool)

PATH_TOKEN_RE = re.compile(r':([A-Za-z0-9_]+)')


def check_args(args, rules, name):
    """
    Check call arguments against a resource's argument rules.

    :param args: A mapping of argument names to values.

    :param rules:
        A mapping of argument names to ``True`` (required) or ``False``
        (optional). If ``None``, any arguments are accepted.

    :param str name: The resource name, used in error messages.

    Unknown and non-scalar arguments are reported before missing required
    ones. Raises a subclass of :class:`~txtwitcall.error.ArgumentError` on
    the first problem found.

    :returns: ``None``
    """
    if not hasattr(args, 'items'):
        raise InvalidArgumentShape(name)
    if rules is None:
        return

    for arg, value in args.items():
        if arg not in rules:
            raise UnknownArgument(name, arg, rules)
        if not isinstance(value, SCALAR_TYPES):
            raise NonScalarArgument(name, arg, value)

    required = [arg for arg, req in rules.items() if req]
    for arg in required:
        if arg not in args:
            raise MissingRequiredArgument(name, arg, required)


def stringify_param(value):
    """
    Turn a scalar argument into the string the API expects.

    Booleans become ``'true'`` or ``'false'``; everything else goes through
    ``str()``.
    """
    if value is True:
        return 'true'
    if value is False:
        return 'false'
    return str(value)


def resolve_url(base_url, path, params, name='resolve_url'):
    """
    Fill ``:name`` placeholders in ``path`` from ``params``.

    Each placeholder's value is removed from ``params`` so it isn't also sent
    as a query or body parameter. Values are substituted as they are, without
    escaping.

    :returns: The full resource URL, including the ``.json`` suffix.
    """
    def replace(match):
        key = match.group(1)
        if key not in params:
            raise MissingPathArgument(name, key, path)
        return params.pop(key)

    path = PATH_TOKEN_RE.sub(replace, path)
    return "%s/%s.json" % (base_url.rstrip('/'), path.lstrip('/'))


class TwitterClient(object):
    """
    A client for a REST API described by a table of resource declarations.

    Every resource in the table is available as a method, so
    ``client.get_tweet(id='123')`` calls the ``get_tweet`` resource. Methods
    return Deferreds that fire with an
    :class:`~txtwitcall.objects.ApiResponse`.

    A client created without an access token must log in with
    :meth:`start_login` and :meth:`confirm_login` before most resources will
    succeed.
    """

    def __init__(self, consumer_key, consumer_secret, token_key=None,
                 token_secret=None, api_url=TWITTER_API_URL,
                 oauth_endpoints=TWITTER_OAUTH_ENDPOINTS, resources=None,
                 agent=None):
        self._api_url_base = api_url
        if resources is None:
            resources = RESOURCES
        self._resources = load_resources(resources)
        self._methods = {}
        self.transport = OAuthTransport(
            consumer_key, consumer_secret, token_key, token_secret,
            endpoints=oauth_endpoints, agent=agent)
        self._oauth_flow = OAuthFlow(self.transport)

    @property
    def auth_state(self):
        return self._oauth_flow.state

    def raw_call(self, decl, args=None, name=None):
        """
        Call a resource.

        :param decl:
            A :class:`~txtwitcall.resources.ResourceDeclaration` or a
            ``(method, path[, rules])`` sequence.

        :param dict args:
            Scalar arguments for the call. ``None`` values are left out.

        :param str name: The resource name, used in error messages.

        :returns:
            A Deferred that fires with an
            :class:`~txtwitcall.objects.ApiResponse`. The HTTP status is not
            checked; an error response from the API fires the Deferred like
            any other.
        """
        if name is None:
            name = 'raw_call'
        decl = ResourceDeclaration.from_tuple(decl, name)
        if args is None:
            args = {}
        if hasattr(args, 'items'):
            args = dict((k, v) for k, v in args.items() if v is not None)
        check_args(args, decl.rules, name)

        params = dict((k, stringify_param(v)) for k, v in args.items())
        uri = resolve_url(self._api_url_base, decl.path, params, name)
        log.debug(
            "Calling {name}: {method} {uri}", name=name, method=decl.method,
            uri=uri)

        d = self.transport.perform_request(decl.method, uri, params)
        return d.addCallback(self._parse_response, name)

    def _parse_response(self, response, name):
        code, headers, status_line, body = response
        data = None
        if body:
            try:
                data = json.loads(body.decode('utf-8'))
            except ValueError:
                log.warn(
                    "{name}: response body is not JSON ({status_line})",
                    name=name, status_line=status_line)
        return ApiResponse(data, status_line, code, headers)

    def resource_names(self):
        return sorted(self._resources)

    def get_method(self, name):
        """
        Return the method for the resource called ``name``.

        Methods are built the first time they are asked for and reused after
        that. Raises ``AttributeError`` if there is no such resource.
        """
        method = self._methods.get(name)
        if method is not None:
            return method

        decl = self._resources.get(name)
        if decl is None:
            raise AttributeError(
                "%r object has no resource %r" % (type(self).__name__, name))

        def method(**args):
            return self.raw_call(decl, args, name)
        method.__name__ = name
        method.__doc__ = "%s %s" % (decl.method, decl.path)

        log.debug("Binding resource {name}", name=name)
        self._methods[name] = method
        return method

    def __getattr__(self, name):
        # Only reached for names that aren't normal attributes.
        if name.startswith('_'):
            raise AttributeError(name)
        return self.get_method(name)

    # OAuth

    def start_login(self):
        """
        Begin OAuth authorization.

        :returns:
            A Deferred that fires with ``(authorization_url, auth_header)``.
            The user must visit ``authorization_url`` to authorize the app and
            get the PIN needed for :meth:`confirm_login`.
        """
        return self._oauth_flow.start_login()

    def confirm_login(self, pin):
        """
        Finish OAuth authorization with the PIN from :meth:`start_login`.

        :returns:
            A Deferred that fires with an
            :class:`~txtwitcall.objects.ApiResponse` holding an
            :class:`~txtwitcall.objects.AccessToken`, or fails with
            :class:`~txtwitcall.error.AuthorizationDenied` if the PIN is
            rejected. Either way, :meth:`confirm_login` may be retried.
        """
        return self._oauth_flow.confirm_login(pin)


def new_client(keys, **kw):
    """
    Create a :class:`TwitterClient` from a dict of OAuth keys, such as the
    one returned by :func:`~txtwitcall.keys.load_keys`.

    Keyword arguments are passed on to :class:`TwitterClient`.
    """
    if hasattr(keys, 'items'):
        keys = dict((k, v) for k, v in keys.items() if v is not None)
    check_args(keys, OAUTH_KEY_RULES, 'new_client')
    return TwitterClient(
        keys['consumer_key'], keys['consumer_secret'],
        token_key=keys.get('oauth_token'),
        token_secret=keys.get('oauth_token_secret'), **kw)
