from twisted.web import error


class ArgumentError(ValueError):
    """
    Base class for problems with the arguments passed to a resource call.

    These are raised synchronously, before any request is made.
    """


class InvalidArgumentShape(ArgumentError):
    def __init__(self, name):
        self.name = name
        ArgumentError.__init__(
            self, "%s: arguments must be passed in a mapping" % (name,))


class UnknownArgument(ArgumentError):
    def __init__(self, name, argument, allowed):
        self.name = name
        self.argument = argument
        self.allowed = frozenset(allowed)
        ArgumentError.__init__(
            self, "%s: invalid argument '%s' not in (%s)" % (
                name, argument, _names_str(self.allowed)))


class NonScalarArgument(ArgumentError):
    def __init__(self, name, argument, value):
        self.name = name
        self.argument = argument
        self.value = value
        ArgumentError.__init__(
            self, "%s: argument '%s' must be a scalar type, got %r" % (
                name, argument, value))


class MissingRequiredArgument(ArgumentError):
    def __init__(self, name, argument, required):
        self.name = name
        self.argument = argument
        self.required = frozenset(required)
        ArgumentError.__init__(
            self, "%s: missing required argument '%s' in (%s)" % (
                name, argument, _names_str(self.required)))


class MissingPathArgument(ArgumentError):
    def __init__(self, name, argument, path):
        self.name = name
        self.argument = argument
        self.path = path
        ArgumentError.__init__(
            self, "%s: invalid token ':%s' in resource URL '%s'" % (
                name, argument, path))


class InvalidDeclaration(ValueError):
    pass


class LoginNotStarted(RuntimeError):
    pass


class TwitterAPIError(error.Error):
    pass


class AuthorizationDenied(TwitterAPIError):
    """
    An OAuth token endpoint rejected our request.

    ``args`` are ``(code, phrase, body)`` as for any
    :class:`twisted.web.error.Error`.
    """


class TransportFailure(Exception):
    """
    The request could not be completed at the network level.

    The original :class:`twisted.python.failure.Failure` is kept in
    ``failure``.
    """

    def __init__(self, uri, failure):
        self.uri = uri
        self.failure = failure
        Exception.__init__(self, "Request to %s failed: %s" % (
            uri, failure.getErrorMessage()))


def _names_str(names):
    return ", ".join(sorted(names))
