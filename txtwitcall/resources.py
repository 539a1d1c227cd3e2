"""
Declarations for Twitter REST API v1.1 resources.

Each entry maps a resource name to ``(method, path, rules)``. ``path`` is
relative to the API base URL, without the ``.json`` suffix, and may contain
``:name`` placeholders that are filled from the call arguments. ``rules``
maps every accepted argument to ``True`` (required) or ``False`` (optional),
or is ``None`` if the resource accepts arbitrary arguments.
"""

from collections import namedtuple

from txtwitcall.error import InvalidDeclaration


class ResourceDeclaration(namedtuple(
        'ResourceDeclaration', ['method', 'path', 'rules'])):
    __slots__ = ()

    @classmethod
    def from_tuple(cls, decl, name='resource'):
        """
        Build a declaration from a ``(method, path[, rules])`` sequence.

        Raises :class:`InvalidDeclaration` if ``decl`` is too short or too
        long, or if its fields have the wrong types.
        """
        if isinstance(decl, cls):
            return decl
        if isinstance(decl, str):
            raise InvalidDeclaration(
                "%s: invalid resource declaration %r" % (name, decl))
        try:
            fields = tuple(decl)
        except TypeError:
            raise InvalidDeclaration(
                "%s: invalid resource declaration %r" % (name, decl))
        if not 2 <= len(fields) <= 3:
            raise InvalidDeclaration(
                "%s: invalid resource declaration %r" % (name, decl))
        method, path = fields[:2]
        rules = fields[2] if len(fields) == 3 else None
        if not isinstance(method, str) or not isinstance(path, str):
            raise InvalidDeclaration(
                "%s: method and path must be strings, got %r" % (name, decl))
        if rules is not None:
            if not hasattr(rules, 'items'):
                raise InvalidDeclaration(
                    "%s: rules must be a mapping or None, got %r" % (
                        name, rules))
            rules = dict(rules)
        return cls(method.upper(), path, rules)


def load_resources(table):
    """
    Validate a declaration table and return a new dict of
    :class:`ResourceDeclaration` keyed by resource name.
    """
    return dict(
        (name, ResourceDeclaration.from_tuple(decl, name))
        for name, decl in table.items())


_TWEET_OPTS = {
    'trim_user': False,
    'include_entities': False,
}

_TIMELINE_OPTS = dict(_TWEET_OPTS, **{
    'count': False,
    'since_id': False,
    'max_id': False,
    'contributor_details': False,
})

_USER_OPTS = {
    'user_id': False,
    'screen_name': False,
}

_CURSOR_OPTS = dict(_USER_OPTS, **{
    'cursor': False,
    'stringify_ids': False,
    'count': False,
})


RESOURCES = load_resources({
    # Timelines
    'get_mentions_timeline': (
        'GET', 'statuses/mentions_timeline', _TIMELINE_OPTS),
    'get_user_timeline': ('GET', 'statuses/user_timeline', dict(
        _TIMELINE_OPTS, exclude_replies=False, include_rts=False,
        **_USER_OPTS)),
    'get_home_timeline': ('GET', 'statuses/home_timeline', dict(
        _TIMELINE_OPTS, exclude_replies=False)),
    'get_retweets_of_me': ('GET', 'statuses/retweets_of_me', dict(
        _TIMELINE_OPTS, include_user_entities=False)),

    # Tweets
    'get_retweets': ('GET', 'statuses/retweets/:id', {
        'id': True,
        'count': False,
        'trim_user': False,
    }),
    'get_tweet': ('GET', 'statuses/show/:id', dict(
        _TWEET_OPTS, id=True, include_my_retweet=False)),
    'delete_tweet': ('POST', 'statuses/destroy/:id', {
        'id': True,
        'trim_user': False,
    }),
    'tweet': ('POST', 'statuses/update', {
        'status': True,
        'in_reply_to_status_id': False,
        'lat': False,
        'long': False,
        'place_id': False,
        'display_coordinates': False,
        'trim_user': False,
        'media_ids': False,
    }),
    'retweet': ('POST', 'statuses/retweet/:id', {
        'id': True,
        'trim_user': False,
    }),
    'get_oembed': ('GET', 'statuses/oembed', {
        'id': False,
        'url': False,
        'maxwidth': False,
        'hide_media': False,
        'hide_thread': False,
        'omit_script': False,
        'align': False,
        'related': False,
        'lang': False,
    }),
    'get_retweeter_ids': ('GET', 'statuses/retweeters/ids', {
        'id': True,
        'cursor': False,
        'stringify_ids': False,
    }),
    'lookup_tweets': ('GET', 'statuses/lookup', dict(
        _TWEET_OPTS, id=True, map=False)),

    # Search
    'search_tweets': ('GET', 'search/tweets', {
        'q': True,
        'geocode': False,
        'lang': False,
        'locale': False,
        'result_type': False,
        'count': False,
        'until': False,
        'since_id': False,
        'max_id': False,
        'include_entities': False,
        'callback': False,
    }),

    # Direct Messages
    'get_received_dms': ('GET', 'direct_messages', {
        'since_id': False,
        'max_id': False,
        'count': False,
        'include_entities': False,
        'skip_status': False,
    }),
    'get_sent_dms': ('GET', 'direct_messages/sent', {
        'since_id': False,
        'max_id': False,
        'count': False,
        'page': False,
        'include_entities': False,
    }),
    'get_dm': ('GET', 'direct_messages/show', {'id': True}),
    'delete_dm': ('POST', 'direct_messages/destroy', {
        'id': True,
        'include_entities': False,
    }),
    'send_dm': ('POST', 'direct_messages/new', dict(
        _USER_OPTS, text=True)),

    # Friends & Followers
    'get_friend_ids': ('GET', 'friends/ids', _CURSOR_OPTS),
    'get_follower_ids': ('GET', 'followers/ids', _CURSOR_OPTS),
    'get_friends': ('GET', 'friends/list', dict(
        _CURSOR_OPTS, skip_status=False, include_user_entities=False)),
    'get_followers': ('GET', 'followers/list', dict(
        _CURSOR_OPTS, skip_status=False, include_user_entities=False)),
    'lookup_friendships': ('GET', 'friendships/lookup', _USER_OPTS),
    'follow': ('POST', 'friendships/create', dict(_USER_OPTS, follow=False)),
    'unfollow': ('POST', 'friendships/destroy', _USER_OPTS),
    'get_friendship': ('GET', 'friendships/show', {
        'source_id': False,
        'source_screen_name': False,
        'target_id': False,
        'target_screen_name': False,
    }),

    # Users
    'get_account_settings': ('GET', 'account/settings', {}),
    'verify_credentials': ('GET', 'account/verify_credentials', {
        'include_entities': False,
        'skip_status': False,
    }),
    'update_profile': ('POST', 'account/update_profile', {
        'name': False,
        'url': False,
        'location': False,
        'description': False,
        'include_entities': False,
        'skip_status': False,
    }),
    'get_blocked_ids': ('GET', 'blocks/ids', {
        'stringify_ids': False,
        'cursor': False,
    }),
    'block_user': ('POST', 'blocks/create', dict(
        _USER_OPTS, include_entities=False, skip_status=False)),
    'unblock_user': ('POST', 'blocks/destroy', dict(
        _USER_OPTS, include_entities=False, skip_status=False)),
    'lookup_users': ('GET', 'users/lookup', dict(
        _USER_OPTS, include_entities=False)),
    'get_user': ('GET', 'users/show', dict(
        _USER_OPTS, include_entities=False)),
    'search_users': ('GET', 'users/search', {
        'q': True,
        'page': False,
        'count': False,
        'include_entities': False,
    }),

    # Favorites
    'get_favorites': ('GET', 'favorites/list', dict(
        _USER_OPTS, count=False, since_id=False, max_id=False,
        include_entities=False)),
    'set_favorite': ('POST', 'favorites/create', {
        'id': True,
        'include_entities': False,
    }),
    'unset_favorite': ('POST', 'favorites/destroy', {
        'id': True,
        'include_entities': False,
    }),

    # Lists
    'get_lists': ('GET', 'lists/list', dict(_USER_OPTS, reverse=False)),
    'get_list_timeline': ('GET', 'lists/statuses', {
        'list_id': False,
        'slug': False,
        'owner_screen_name': False,
        'owner_id': False,
        'since_id': False,
        'max_id': False,
        'count': False,
        'include_entities': False,
        'include_rts': False,
    }),

    # Saved Searches
    'get_saved_searches': ('GET', 'saved_searches/list', {}),
    'get_saved_search': ('GET', 'saved_searches/show/:id', {'id': True}),
    'delete_saved_search': (
        'POST', 'saved_searches/destroy/:id', {'id': True}),

    # Places & Geo
    'get_place': ('GET', 'geo/id/:place_id', {'place_id': True}),
    'reverse_geocode': ('GET', 'geo/reverse_geocode', {
        'lat': True,
        'long': True,
        'accuracy': False,
        'granularity': False,
        'max_results': False,
        'callback': False,
    }),

    # Trends
    'get_trends': ('GET', 'trends/place', {
        'id': True,
        'exclude': False,
    }),
    'get_trends_available': ('GET', 'trends/available', {}),

    # Help
    'get_configuration': ('GET', 'help/configuration', {}),
    'get_languages': ('GET', 'help/languages', {}),
    'get_rate_limit': ('GET', 'application/rate_limit_status', {
        'resources': False,
    }),
})
