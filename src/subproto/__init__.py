"""

Extendable Protocol Locators

- Locator: a parsed resource locator (scheme, authority, path, query, fragment). Each locator
  is bound to the handler that parsed it, and equality, hashing and the string form are
  delegated to that handler.
- LocatorHandler: parses locator text for one scheme and opens connections for it.
- ExtendableProtocolHandler: a handler whose scheme carries a chain of sub-protocols,
  like "jdbc:mysql://localhost:3307/mydb". The chain is moved into a matrix parameter of the
  path ("jdbc://localhost:3307/mydb;_sp=mysql") before the native parsing, so the outer scheme
  is the only one the registry needs to know about.
- SubProtocolConnectionFactory: a plugin owned by an extendable handler. Factories are tried in
  priority order (lowest value first) and the first one that creates a connection wins.
  When none does, the handler's fallback connection is opened instead.
- HandlerRegistry: maps scheme names to handlers. Handlers are registered explicitly via
  handler.init(registry), or discovered on demand from the handler packages.


Handler discovery

A handler constructed without a protocol must follow the naming conventions:
the class is called "Handler", is declared at the top level of a module, and that
module lives in a package. The module name gives the scheme, e.g. the class
`acme.protocols.jdbc.Handler` handles the "jdbc" scheme and is found by searching the
package "acme.protocols".

Packages are listed in a HandlerPackages instance owned by the registry. They can be given
explicitly, read from the SUBPROTO_HANDLER_PACKAGES environment variable ('|' separated)
or loaded from the [handlers] section of a configuration file.


## Threading

Handlers are expected to be built and registered at startup. After init() the factories
are held in a tuple and the handler is only read, so connections may be opened from any
thread. Opening a connection is synchronous; timeouts belong to the connection itself.

"""
