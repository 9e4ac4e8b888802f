"""
Naming conventions for handlers that are found by discovery.

The class must:
    - be declared at the top level of its module
    - be named "Handler"
    - live in a module inside a package, outside the builtin handler package

The module name gives the protocol, and its parent package is the one searched
during discovery: `acme.protocols.jdbc.Handler` handles "jdbc" and is found in "acme.protocols".
"""

HANDLER_CONVENTION_CLASS_NAME = 'Handler'

DEFAULT_HANDLER_PACKAGE_PREFIX = 'subproto.protocol'

PACKAGE_SEPARATOR = '.'


class HandlerError(Exception):
    """ base class for handler configuration errors. """


class HandlerConventionError(HandlerError):
    """ A handler class does not follow the naming conventions. """


def assert_conventions(cls):
    assert_class_top_level(cls)
    assert_class_name(cls)
    assert_package(cls)


def assert_class_top_level(cls):
    if cls.__qualname__ != cls.__name__:
        raise HandlerConventionError("The implementation %s must be the top level" % cls.__qualname__)


def assert_class_name(cls):
    if cls.__name__ != HANDLER_CONVENTION_CLASS_NAME:
        raise HandlerConventionError("The implementation class must name '%s', actual : '%s'"
                                     % (HANDLER_CONVENTION_CLASS_NAME, cls.__name__))


def assert_package(cls):
    module_name = cls.__module__
    if not module_name or PACKAGE_SEPARATOR not in module_name:
        raise HandlerConventionError("The Handler class must not be present at the top package!")
    if module_name == DEFAULT_HANDLER_PACKAGE_PREFIX \
            or module_name.startswith(DEFAULT_HANDLER_PACKAGE_PREFIX + PACKAGE_SEPARATOR):
        raise HandlerConventionError("The Handler class must not be present in the builtin package : '%s'"
                                     % DEFAULT_HANDLER_PACKAGE_PREFIX)


def resolve_convention_protocol(module_name):
    """
    >>> resolve_convention_protocol('acme.protocols.jdbc')
    'jdbc'
    """
    return module_name[module_name.rfind(PACKAGE_SEPARATOR) + 1:]


def resolve_handler_package(module_name):
    """
    >>> resolve_handler_package('acme.protocols.jdbc')
    'acme.protocols'
    """
    return module_name[:module_name.rfind(PACKAGE_SEPARATOR)]
