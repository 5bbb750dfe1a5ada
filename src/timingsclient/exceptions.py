#!/usr/bin/env python
"""timingsclient exceptions."""

from timingsclient.constants import STATUSES


class TimingsClientError(Exception):
    """timingsclient base error.

    To use::

        import sys
        try:
            ...
        except TimingsClientError as exc:
            log.exception("log message")
            sys.exit(exc.exit_code)

    Attributes:
        exit_code (int): this is 1 by default (failure)

    """

    def __init__(self, *args, exit_code=STATUSES["failure"], **kwargs):
        """Initialize TimingsClientError.

        Args:
            *args: These are passed on via super().
            exit_code (int, optional): The exit_code we should exit with when
                this exception is raised.  Defaults to 1 (failure).
            **kwargs: These are passed on via super().

        """
        self.exit_code = exit_code
        super(TimingsClientError, self).__init__(*args, **kwargs)


class NotFoundError(TimingsClientError):
    """No push or timings job exists for the requested revision."""


class FetchError(TimingsClientError):
    """A Treeherder listing could not be fetched."""


class ConfigError(TimingsClientError):
    """Invalid timingsclient configuration.

    Use it when the config file, the command line or the page url
    can't be turned into a usable config.

    """

    def __init__(self, msg):
        """Initialize ConfigError.

        Args:
            msg (string): the error message

        """
        super().__init__(msg, exit_code=STATUSES["malformed-config"])
