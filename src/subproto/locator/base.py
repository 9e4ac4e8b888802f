from subproto.connection.base import NO_PROXY, ConnectionNotAvailableError
from subproto.locator.urls import split_scheme, to_external_form, FRAGMENT, QUERY_STRING, PATH_SEPARATOR


class MalformedLocatorError(ValueError):
    """ The locator text cannot be parsed. """


class Locator:
    """
    A parsed resource locator. The fields are set by the handler that parses the locator text,
    and the handler also decides how locators are compared, hashed and written out.
    """

    def __init__(self, scheme, handler):
        self.scheme = scheme
        self.handler = handler
        self.user_info = None
        self.host = None
        self.port = None
        self.path = ''
        self.query = None
        self.fragment = None

    @classmethod
    def parse(cls, spec, handlers):
        """
        Parses a locator string.
        :param spec: the locator text, such as "jdbc:mysql://localhost:3307/mydb?charset=UTF-8#top"
        :param handlers: provides the handler for the scheme through lookup(scheme)
        :return: the parsed Locator
        """
        text = spec.strip()
        scheme, start = split_scheme(text)
        if scheme is None:
            raise MalformedLocatorError("no scheme: %s" % spec)
        locator = cls(scheme, handlers.lookup(scheme))
        limit = text.find(FRAGMENT, start)
        if limit < 0:
            limit = len(text)
        else:
            locator.fragment = text[limit + 1:]
        locator.handler.parse_url(locator, text, start, limit)
        return locator

    def set(self, user_info, host, port, path, query):
        self.user_info = user_info
        self.host = host
        self.port = port
        self.path = path
        self.query = query

    @property
    def authority(self):
        """ [user_info@]host[:port], or None when the locator has no host. """
        if self.host is None:
            return None
        authority = self.host
        if self.user_info is not None:
            authority = self.user_info + '@' + authority
        if self.port is not None:
            authority += ':' + str(self.port)
        return authority

    def external_form(self):
        return self.handler.to_external_form(self)

    def same_host(self, other):
        return self.handler.hosts_equal(self, other)

    def open_connection(self, proxy=NO_PROXY):
        """
        Opens a connection to the resource.
        :raises ConnectionNotAvailableError: when the handler cannot open a connection for the locator
        """
        connection = self.handler.open_connection(self, proxy)
        if connection is None:
            raise ConnectionNotAvailableError("no connection could be opened for %s" % self)
        return connection

    def __eq__(self, other):
        return isinstance(other, Locator) and self.handler.equals(self, other)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return self.handler.hash(self)

    def __str__(self):
        return self.external_form()

    def __repr__(self):
        return "Locator('%s')" % self.external_form()


class LocatorHandler:
    """
    Parses the text of locators for one scheme and opens connections to them.
    The base implementation understands hierarchical locators, scheme://authority/path?query,
    and cannot open connections.
    """

    default_port = None

    def __init__(self, protocol):
        self.protocol = protocol

    def init(self, registry):
        """ Registers this handler for its protocol. """
        registry.register(self)

    def open_connection(self, locator, proxy=NO_PROXY):
        """
        Opens a connection to the resource a locator refers to.
        :return: the connection, or None when this handler cannot open one.
        """
        return None

    def parse_url(self, locator, spec, start, limit):
        """
        Parses spec[start:limit] into the locator.
        :param locator: the locator that receives the parsed fields
        :param spec: the locator text
        :param start: the index just past the scheme colon
        :param limit: the end of the text to parse. This is the end of the string or the
            position of the fragment "#" character.
        """
        rest = spec[start:limit]
        query = None
        index = rest.find(QUERY_STRING)
        if index >= 0:
            query = rest[index + 1:]
            rest = rest[:index]

        user_info = host = port = None
        if rest.startswith('//'):
            rest = rest[2:]
            index = rest.find(PATH_SEPARATOR)
            if index < 0:
                authority, rest = rest, ''
            else:
                authority, rest = rest[:index], rest[index:]
            user_info, host, port = self._split_authority(authority, spec)
        locator.set(user_info, host, port, rest, query)

    @staticmethod
    def _split_authority(authority, spec):
        """
        >>> LocatorHandler._split_authority('user@[::1]:8080', '')
        ('user', '[::1]', 8080)
        >>> LocatorHandler._split_authority('localhost', '')
        (None, 'localhost', None)
        """
        user_info = None
        index = authority.rfind('@')
        if index >= 0:
            user_info, authority = authority[:index], authority[index + 1:]

        if authority.startswith('['):
            index = authority.find(']')
            if index < 0:
                raise MalformedLocatorError("invalid IPv6 address in %s" % spec)
            host, rest = authority[:index + 1], authority[index + 1:]
        else:
            index = authority.find(':')
            host, rest = (authority, '') if index < 0 else (authority[:index], authority[index:])

        port = None
        if rest:
            if not rest.startswith(':'):
                raise MalformedLocatorError("invalid authority in %s" % spec)
            if rest != ':':
                if not rest[1:].isdigit():
                    raise MalformedLocatorError("invalid port in %s" % spec)
                port = int(rest[1:])
        return user_info, host, port

    def to_external_form(self, locator):
        return to_external_form(locator)

    def same_file(self, a, b):
        """ Compares two locators, excluding the fragment. """
        return a.scheme == b.scheme and self.hosts_equal(a, b) \
            and (a.port or self.default_port) == (b.port or self.default_port) \
            and a.path == b.path and a.query == b.query

    def equals(self, a, b):
        return a.fragment == b.fragment and self.same_file(a, b)

    def hash(self, locator):
        host = (locator.host or '').lower()
        return hash((locator.scheme, host, locator.port or self.default_port,
                     locator.path, locator.query, locator.fragment))

    def hosts_equal(self, a, b):
        """ Host names are compared without regard to case. """
        return (a.host or '').lower() == (b.host or '').lower()

    def __repr__(self):
        return "%s{default_port=%s,protocol=%s}" % (type(self).__name__, self.default_port, self.protocol)
