"""
Presentational helpers made available to every layout as Jinja globals.
"""
from __future__ import annotations

from urllib.parse import urljoin

from markupsafe import Markup, escape


# Desktop column spans for the magazine grid, by position.
DESKTOP_COLUMNS = (12, 6, 6, 12, 7, 5, 5, 7)
DEFAULT_DESKTOP_COLUMNS = 12
SHORT_LIST_LENGTH = 8


def post_cell(index: int, length: int) -> str:
    """
    Grid cell classes for the post at @index in a list of @length posts.

    In lists shorter than eight posts, the last two positions are wrapped to
    negative indices so they fall back to the full-width default.
    """
    if length < SHORT_LIST_LENGTH and index in (length - 1, length - 2):
        index -= length

    if 0 <= index < len(DESKTOP_COLUMNS):
        desktop = DESKTOP_COLUMNS[index]
    else:
        desktop = DEFAULT_DESKTOP_COLUMNS

    return f'mdl-cell--{desktop}-col-desktop mdl-cell--8-col-tablet mdl-cell--4-col-phone'


def post_illustration(thumb: str, alt: str) -> Markup:
    """
    Responsive `<picture>` for a post thumbnail. @thumb is the image path
    without extension; `-tablet`, `-mobile` and `@2x` variants are expected
    beside it in both WebP and JPEG.
    """
    thumb = escape(thumb)
    return Markup(f'''
    <picture class="safe-picture">
      <source media="(min-width: 1025px)"
              srcset="{thumb}.webp 1x, {thumb}@2x.webp 2x"
              type="image/webp">
      <source media="(min-width: 1025px)"
              srcset="{thumb}.jpg 1x, {thumb}@2x.jpg 2x">
      <source media="(min-width: 768px)"
              srcset="{thumb}-tablet.webp 1x, {thumb}-tablet@2x.webp 2x"
              type="image/webp">
      <source media="(min-width: 768px)"
              srcset="{thumb}-tablet.jpg 1x, {thumb}-tablet@2x.jpg 2x">
      <source srcset="{thumb}-mobile.webp 1x, {thumb}-mobile@2x.webp 2x"
              type="image/webp">
      <source srcset="{thumb}-mobile.jpg 1x, {thumb}-mobile@2x.jpg 2x">
      <img src="{thumb}.jpg" alt="{escape(alt)}" class="safe-picture__img">
    </picture>''')


def share_link(siteurl: str, path: str) -> str:
    return urljoin(siteurl, path)


def post_share(siteurl: str, path: str, id: int = 0) -> Markup:  # pylint: disable=redefined-builtin
    """
    Share menu for a post, with Twitter and Facebook links to @path resolved
    against @siteurl.
    """
    link = share_link(siteurl, path)
    return Markup(f'''
    <div class="mdl-card__menu post-share">
      <button id="share-menu-{id}"
              class="mdl-button mdl-button--icon mdl-js-button mdl-js-ripple-effect post-share__button"
              title="Share this post">
        <svg class="mdl-svg post-share__icon">
          <use xlink:href="#share"></use>
        </svg>
      </button>
      <ul class="mdl-menu mdl-menu--bottom-right mdl-js-menu mdl-js-ripple-effect share-menu"
          for="share-menu-{id}">
        <li class="mdl-menu__item share-menu__item">
          <a href="//twitter.com/home?status={link}" class="share-menu__link" target="_blank" rel="nofollow">
            <svg class="share-menu__icon">
              <use xlink:href="#twitter"></use>
            </svg>
            Twitter
          </a>
        </li>
        <li class="mdl-menu__item share-menu__item">
          <a href="//www.facebook.com/sharer.php?u={link}" class="share-menu__link" target="_blank" rel="nofollow">
            <svg class="share-menu__icon">
              <use xlink:href="#facebook"></use>
            </svg>
            Facebook
          </a>
        </li>
      </ul>
    </div>''')


HELPERS = {
    'post_cell': post_cell,
    'post_illustration': post_illustration,
    'post_share': post_share,
}
