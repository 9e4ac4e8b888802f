"""
Locator parsing primitives.

A composite scheme such as "jdbc:mysql:replication://host/db" names an outer scheme ("jdbc")
followed by a chain of sub-protocols ("mysql", "replication"). The chain is carried through
the native parser as a matrix parameter of the path:

    jdbc:mysql:replication://host/db?x=1  ->  jdbc://host/db;_sp=mysql,replication?x=1
"""
import re

COLON = ':'
SCHEME_SEPARATOR = '://'
QUERY_STRING = '?'
FRAGMENT = '#'
PATH_SEPARATOR = '/'
MATRIX_SEPARATOR = ';'
MATRIX_VALUE_SEPARATOR = ','

# the matrix parameter that carries the sub-protocol chain
SUB_PROTOCOL_MATRIX_NAME = '_sp'

_scheme_token = r'[A-Za-z][A-Za-z0-9+.\-]*'
_scheme_pattern = re.compile(_scheme_token)
_chain_pattern = re.compile(r'(?:%s)?(?::(?:%s)?)*' % (_scheme_token, _scheme_token))


def split_scheme(spec):
    """
    Finds the scheme of a locator string.
    :return: a (scheme, start) tuple, where start is the index just past the scheme colon.
        The scheme is lower case. (None, -1) when the spec does not begin with a scheme.

    >>> split_scheme('JDBC:mysql://localhost/db')
    ('jdbc', 5)
    >>> split_scheme('/no/scheme')
    (None, -1)
    """
    index = spec.find(COLON)
    if index <= 0 or not _scheme_pattern.fullmatch(spec[:index]):
        return None, -1
    return spec[:index].lower(), index + 1


def split_sub_protocols(text):
    """
    >>> split_sub_protocols('mysql:replication')
    ['mysql', 'replication']
    >>> split_sub_protocols('::mysql')
    ['mysql']
    """
    return [token for token in text.split(COLON) if token]


def is_sub_protocol_chain(text):
    """
    Determines if the text is a colon separated list of scheme names.

    >>> is_sub_protocol_chain('mysql:replication')
    True
    >>> is_sub_protocol_chain('//host/path?next=http')
    False
    """
    return bool(text) and _chain_pattern.fullmatch(text) is not None


def build_matrix_string(name, values):
    """
    >>> build_matrix_string('_sp', ['mysql', 'replication'])
    ';_sp=mysql,replication'
    >>> build_matrix_string('_sp', [])
    ''
    """
    if not values:
        return ''
    return MATRIX_SEPARATOR + name + '=' + MATRIX_VALUE_SEPARATOR.join(values)


def find_matrix_value(text, name):
    """
    Retrieves the value of the first matrix parameter with the given name.
    :return: the value, or None when the parameter is absent

    >>> find_matrix_value('/db;_sp=mysql,ssl;x=1', '_sp')
    'mysql,ssl'
    >>> find_matrix_value('/db', '_sp') is None
    True
    """
    if not text:
        return None
    key = MATRIX_SEPARATOR + name + '='
    index = text.find(key)
    if index < 0:
        return None
    start = index + len(key)
    return text[start:_matrix_value_end(text, start)]


def remove_matrix_parameter(text, name):
    """
    Removes every matrix parameter with the given name.

    >>> remove_matrix_parameter('/a;_sp=h2,mem/db;x=1;_sp=h2', '_sp')
    '/a/db;x=1'
    """
    if not text:
        return text
    key = MATRIX_SEPARATOR + name + '='
    index = text.find(key)
    while index >= 0:
        text = text[:index] + text[_matrix_value_end(text, index + len(key)):]
        index = text.find(key, index)
    return text


def _matrix_value_end(text, start):
    end = start
    while end < len(text) and text[end] not in ';/?#':
        end += 1
    return end


def resolve_sub_protocols(locator):
    """
    Resolves the sub-protocol chain of a locator.

    For a parsed locator the chain is read from the sub-protocol matrix parameter of its path.
    For a locator string, the matrix parameter is used when present, otherwise the chain is read
    from the composite scheme.
    :param locator: a Locator or a locator string
    :return: the sub-protocols in order, empty if there are none.

    >>> resolve_sub_protocols('jdbc:mysql:ssl://localhost/db')
    ['mysql', 'ssl']
    >>> resolve_sub_protocols('jdbc://localhost/db;_sp=mysql')
    ['mysql']
    >>> resolve_sub_protocols('jdbc://localhost/db')
    []
    """
    if isinstance(locator, str):
        return _resolve_sub_protocols_string(locator)
    value = find_matrix_value(locator.path, SUB_PROTOCOL_MATRIX_NAME)
    if value is None:
        return split_sub_protocols(locator.scheme)[1:] if locator.scheme else []
    return _split_matrix_value(value)


def _resolve_sub_protocols_string(spec):
    scheme, start = split_scheme(spec)
    if scheme is None:
        return []
    end = spec.find(SCHEME_SEPARATOR, start)
    if end > start and is_sub_protocol_chain(spec[start:end]):
        return split_sub_protocols(spec[start:end])
    value = find_matrix_value(_before_query(spec[start:]), SUB_PROTOCOL_MATRIX_NAME)
    return [] if value is None else _split_matrix_value(value)


def _before_query(text):
    """
    >>> _before_query('//h/db;_sp=a?q=;_sp=x#f')
    '//h/db;_sp=a'
    """
    for marker in (QUERY_STRING, FRAGMENT):
        index = text.find(marker)
        if index >= 0:
            text = text[:index]
    return text


def _split_matrix_value(value):
    return [token for token in value.split(MATRIX_VALUE_SEPARATOR) if token]


def rewrite_spec(outer_scheme, spec, start, end, limit):
    """
    Rewrites a locator string whose scheme carries sub-protocols into the single-scheme form.
    The sub-protocols become a matrix parameter inserted at the end of the path, before any
    query string. Sub-protocol parameters already in the path are dropped, so the chain always
    comes from the scheme.

    :param outer_scheme: the scheme recognized for the locator, e.g. "jdbc"
    :param spec: the locator string, e.g. "jdbc:mysql://localhost:3307/mydb?charset=UTF-8#top"
    :param start: the index just past the outer scheme colon
    :param end: the index of "://"
    :param limit: the end of the spec, or the index of the fragment "#"
    :return: the rewritten spec without the fragment, e.g. "jdbc://localhost:3307/mydb;_sp=mysql?charset=UTF-8".
        The spec is returned unchanged when the scheme has no sub-protocols.
    """
    if end <= start:
        return spec
    chain = spec[start:end]
    sub_protocols = split_sub_protocols(chain) if is_sub_protocol_chain(chain) else []
    if not sub_protocols:
        return spec
    matrix = build_matrix_string(SUB_PROTOCOL_MATRIX_NAME, sub_protocols)
    rewritten = outer_scheme + spec[end:limit]

    # positions are taken from the rewritten text, where the suffix starts after the outer scheme
    suffix_start = len(outer_scheme)
    insert_index = rewritten.find(QUERY_STRING, suffix_start)
    if insert_index < 0:
        insert_index = len(rewritten)
    head = remove_matrix_parameter(rewritten[:insert_index], SUB_PROTOCOL_MATRIX_NAME)
    authority_start = suffix_start + len(SCHEME_SEPARATOR)
    if head.find(PATH_SEPARATOR, authority_start) < 0:
        matrix = PATH_SEPARATOR + matrix
    return head + matrix + rewritten[insert_index:]


def resolve_path(path):
    """
    Removes the matrix parameters from each segment of a path.

    >>> resolve_path('/a;x=1/db;_sp=mysql')
    '/a/db'
    """
    if not path:
        return path
    return PATH_SEPARATOR.join(segment.split(MATRIX_SEPARATOR, 1)[0]
                               for segment in path.split(PATH_SEPARATOR))


def resolve_authority(locator):
    """ The authority of the locator, without any matrix parameters. """
    authority = locator.authority
    if authority:
        authority = authority.split(MATRIX_SEPARATOR, 1)[0]
    return authority


def to_external_form(locator):
    """
    Constructs the string form of a locator. Equal locators always produce the same text.

    The form is scheme ":" ["//" authority] path ["?" query] ["#" fragment]
    """
    parts = [locator.scheme, COLON]
    authority = locator.authority
    if authority:
        parts.append('//')
        parts.append(authority)
    if locator.path:
        parts.append(locator.path)
    if locator.query is not None:
        parts.append(QUERY_STRING)
        parts.append(locator.query)
    if locator.fragment is not None:
        parts.append(FRAGMENT)
        parts.append(locator.fragment)
    return ''.join(parts)
