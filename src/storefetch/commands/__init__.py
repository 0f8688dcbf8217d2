"""Built-in CLI sub-commands for storefetch.

* :mod:`~storefetch.commands.get` -- cached fetch of arbitrary GET paths.
* :mod:`~storefetch.commands.admin` -- back-office product, order and
  dashboard views.
* :mod:`~storefetch.commands.config` -- view and modify global settings.

Multi-command groups export a :class:`typer.Typer` sub-application; single
commands export a plain callback registered on the root app.
"""
