"""Contains the name for the logger of polykit modules.

``polykit`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``DEBUG``: Details of numerical decisions, e.g. a NaN collapse in
    differentiation or a fallback from exact to floating-point roots.
* ``WARNING``: An indication that something unexpected
    happened which may require attention, e.g. an ignored assignment
    to a negative power.

By default, only messages of level ``WARNING`` are displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``polykit.logger.polykit_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "polykit"
polykit_logger = logging.getLogger(logger_name)
