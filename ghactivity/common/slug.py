"""Repository slug utilities.

Repository slugs are GitHub identifiers in ``owner/name`` format. They are not
filesystem paths, even though they use ``/`` as a separator, so they should be
parsed using these helpers rather than ``pathlib``.
"""

from __future__ import annotations


def repo_owner(slug: str) -> str:
    """Return the owner portion of a slug.

    Slugs without an owner are returned unchanged.

    Examples
    --------
    >>> repo_owner("octo/widgets")
    'octo'
    >>> repo_owner("widgets")
    'widgets'

    """
    owner, _, _ = slug.partition("/")
    return owner or slug


def slug_from_api_url(url: str | None, prefix: str) -> str | None:
    """Strip an API ``/repos/`` prefix from a repository URL.

    Parameters
    ----------
    url:
        Repository API URL such as ``https://api.github.com/repos/o/n``.
    prefix:
        The API prefix to strip, including the trailing ``/repos/``.

    Returns
    -------
    str | None
        ``owner/name`` when ``url`` carries the prefix, ``None`` otherwise.

    Examples
    --------
    >>> slug_from_api_url(
    ...     "https://api.github.com/repos/octo/widgets",
    ...     "https://api.github.com/repos/",
    ... )
    'octo/widgets'

    """
    if not url or not url.startswith(prefix):
        return None
    slug = url.removeprefix(prefix).strip("/")
    return slug or None


def base_url(html_url: str) -> str:
    """Drop any ``#fragment`` from a web URL.

    Review URLs carry ``#pullrequestreview-<id>`` fragments; the base URL
    identifies the pull request itself.
    """
    return html_url.split("#", 1)[0]
