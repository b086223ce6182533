"""Registrar: declarative component registration.

Component types are described with decorators that record descriptors in a
side table. A registrar discovers the described types within a scope, resolves
each one to a loader strategy, and instantiates them either at startup or on
demand for a named tag.

Basic Usage:
    >>> from registrar.descriptors import loader_info, register_tag, register_on_start
    >>> from registrar.builders import make_registrar
    >>>
    >>> @register_on_start
    ... @loader_info()
    ... class Database:
    ...     pass
    >>>
    >>> @register_tag("widgets")
    ... @loader_info()
    ... class Widget:
    ...     pass
    >>>
    >>> registrar = make_registrar("myapp")
    >>> registrar.on_start_register()        # constructs Database
    >>> registrar.register_by_tag("widgets")  # constructs Widget

The package consists of several modules:
    - domain: TypeRef and marker classes
    - descriptors: LoaderInfo, RegisterTag and the descriptor side table
    - loaders: the Loader strategy and the built-in DefaultLoader
    - loader_registry: construction of the loader registry
    - scanner: discovery of described types within a scope
    - scope: resolution of the scope from a source tree
    - validation: startup checks over the descriptors
    - registrar: the Registrar lifecycle and dispatch
    - builders: the make_registrar factory
    - config: settings read from the environment
    - logging: structlog configuration
    - errors: registrar-specific exceptions
"""
