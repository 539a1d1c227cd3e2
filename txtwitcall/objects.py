"""
Typed wrappers for API results that callers want to tell apart from plain
dicts.
"""

from collections import namedtuple


ApiResponse = namedtuple(
    'ApiResponse', ['data', 'status_line', 'code', 'headers'])


class AccessToken(object):
    """
    An OAuth access token, as returned by the access token endpoint.

    :ivar str oauth_token: The access token key.
    :ivar str oauth_token_secret: The access token secret.
    :ivar str user_id: The authorized user's ID, if the server sent one.
    :ivar str screen_name:
        The authorized user's screen name, if the server sent one.
    """
    kind = 'access_token'

    def __init__(self, oauth_token, oauth_token_secret, user_id=None,
                 screen_name=None):
        self.oauth_token = oauth_token
        self.oauth_token_secret = oauth_token_secret
        self.user_id = user_id
        self.screen_name = screen_name

    @classmethod
    def from_dict(cls, data):
        missing = [
            k for k in ('oauth_token', 'oauth_token_secret') if k not in data]
        if missing:
            raise ValueError("Access token response missing %s: %r" % (
                ", ".join(missing), data))
        return cls(
            data['oauth_token'], data['oauth_token_secret'],
            user_id=data.get('user_id'), screen_name=data.get('screen_name'))

    def as_keys(self):
        """
        Return the token as a dict suitable for merging with consumer keys.
        """
        return {
            'oauth_token': self.oauth_token,
            'oauth_token_secret': self.oauth_token_secret,
        }

    def __eq__(self, other):
        if not isinstance(other, AccessToken):
            return NotImplemented
        return vars(self) == vars(other)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return '<%s user_id=%r screen_name=%r>' % (
            type(self).__name__, self.user_id, self.screen_name)


OBJECTS = {
    AccessToken.kind: AccessToken,
}


def parse_object(kind, data):
    """
    Build the typed object registered for ``kind`` from a decoded dict.
    """
    try:
        cls = OBJECTS[kind]
    except KeyError:
        raise ValueError("Unknown object kind: %r" % (kind,))
    return cls.from_dict(data)
