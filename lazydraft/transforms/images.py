"""Image reference transform factories for lazydraft.

These factories create transform functions that rewrite the image
references of a draft for the target static site. Transforms are pure
string functions and match literal substrings only.
"""

from typing import Callable

ImageTransform = Callable[[str], str]

WIKILINK_EMBED_OPEN = "![["
WIKILINK_EMBED_CLOSE = "]]"
MARKDOWN_IMAGE_OPEN = "![]("
MARKDOWN_IMAGE_CLOSE = ")"


def asset_url(prefix: str, folder: str = "") -> str:
    """Join a public asset prefix and an optional folder into a URL path.

    The result always ends with a slash so file names can be appended:
    ``asset_url("/img", "hello-world") == "/img/hello-world/"``.
    """
    url = "/" + prefix.strip("/") if prefix.strip("/") else ""
    if folder:
        url = f"{url}/{folder}"
    return url + "/"


def wikilink_embeds(url_prefix: str) -> ImageTransform:
    """Create a transform from wiki-link embeds to markdown images.

    ``![[cover.png]]`` becomes ``![](<url_prefix>cover.png)``. Only the
    closing marker that ends an embed is replaced, so plain ``[[links]]``
    are left alone. An embed that is never closed is left untouched.

    Args:
        url_prefix: URL path prepended to every embedded file name

    Returns:
        A transform function content -> content
    """
    def transform(content: str) -> str:
        parts = []
        pos = 0
        while True:
            start = content.find(WIKILINK_EMBED_OPEN, pos)
            if start == -1:
                break
            name_start = start + len(WIKILINK_EMBED_OPEN)
            end = content.find(WIKILINK_EMBED_CLOSE, name_start)
            if end == -1:
                break
            parts.append(content[pos:start])
            parts.append(MARKDOWN_IMAGE_OPEN + url_prefix)
            parts.append(content[name_start:end])
            parts.append(MARKDOWN_IMAGE_CLOSE)
            pos = end + len(WIKILINK_EMBED_CLOSE)
        parts.append(content[pos:])
        return "".join(parts)
    return transform


def replace_prefix(local_folder: str, public_prefix: str) -> ImageTransform:
    """Create a transform replacing the local asset folder with a public prefix.

    Every occurrence of ``<local_folder>/`` is replaced, wherever it appears,
    so ``assets/x.png`` becomes ``/img/x.png`` whether the prefix is
    written ``/img`` or ``/img/``.

    Args:
        local_folder: Name of the asset folder used inside drafts (e.g. "assets")
        public_prefix: Public URL prefix of the copied assets (e.g. "/img/")

    Returns:
        A transform function content -> content
    """
    folder = local_folder.strip("/")
    replacement = asset_url(public_prefix)

    def transform(content: str) -> str:
        if not folder:
            return content
        return content.replace(folder + "/", replacement)
    return transform
