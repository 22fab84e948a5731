"""Menu Item Setup - materializes a stored post into a ResolvedMenuItem.

Invariants:
    - nav_menu_item posts read their link fields from _menu_item_* meta
    - _invalid is set when the referenced post, term or archive no longer exists
    - title falls back to the referenced object's title when the stored one is empty
    - URLs use plain (query string) permalinks rooted at site_url
"""

from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from navmenu.core.domain_types import MenuItemType, PostStatus
from navmenu.core.menu_item import ResolvedMenuItem
from navmenu.core.prepare_response import absint
from navmenu.core.repository_protocols import PostLike, PostStore
from navmenu.services.content_types import StaticContentTypeRegistry
from navmenu.services.meta_store import read_meta
from navmenu.services.term_store import SqlTermStore

CUSTOM_LINK_LABEL = "Custom Link"
ARCHIVE_LABEL = "Post Type Archive"


class MenuItemSetup:
    """SetupResolver resolving links against posts, terms and content types."""

    def __init__(
        self,
        db: AsyncSession,
        posts: PostStore,
        terms: SqlTermStore,
        content_types: StaticContentTypeRegistry,
        site_url: str,
    ):
        self.db = db
        self.posts = posts
        self.terms = terms
        self.content_types = content_types
        self.site_url = site_url.rstrip("/")

    async def materialize(self, post: PostLike) -> ResolvedMenuItem:
        meta = await read_meta(self.db, post.id)
        item = ResolvedMenuItem(
            id=post.id,
            db_id=post.id,
            post_title=post.post_title,
            post_status=post.post_status,
            post_password=post.post_password,
            post_parent=post.post_parent,
            menu_order=post.menu_order,
            menu_item_parent=meta.get("_menu_item_menu_item_parent", 0),
            object_id=meta.get("_menu_item_object_id", 0),
            object=meta.get("_menu_item_object") or "",
            type=meta.get("_menu_item_type") or MenuItemType.CUSTOM.value,
            target=meta.get("_menu_item_target") or "",
            attr_title=post.post_excerpt,
            description=post.post_content,
            classes=meta.get("_menu_item_classes") or [],
            xfn=meta.get("_menu_item_xfn") or "",
        )

        original_title = ""
        if item.type == MenuItemType.POST_TYPE.value:
            original_title = await self._resolve_post_type(item)
        elif item.type == MenuItemType.POST_TYPE_ARCHIVE.value:
            original_title = self._resolve_archive(item)
        elif item.type == MenuItemType.TAXONOMY.value:
            original_title = await self._resolve_taxonomy(item)
        else:
            item.type_label = CUSTOM_LINK_LABEL
            item.url = meta.get("_menu_item_url") or ""

        item.title = post.post_title if post.post_title != "" else original_title
        return item

    async def _resolve_post_type(self, item: ResolvedMenuItem) -> str:
        content_type = self.content_types.get_post_type(item.object)
        item.type_label = content_type.singular_label if content_type else item.object
        original = await self.posts.get_by_id(absint(item.object_id)) if absint(item.object_id) else None
        if original is None or original.post_status == PostStatus.TRASH.value:
            item.invalid = True
            return ""
        if content_type is None:
            item.invalid = True
        item.url = self.permalink(original)
        return original.post_title

    def _resolve_archive(self, item: ResolvedMenuItem) -> str:
        content_type = self.content_types.get_post_type(item.object)
        item.type_label = ARCHIVE_LABEL
        if content_type is None or not content_type.has_archive:
            item.invalid = True
            return ""
        item.url = self._link({"post_type": content_type.name})
        return content_type.archive_label

    async def _resolve_taxonomy(self, item: ResolvedMenuItem) -> str:
        taxonomy = self.content_types.get_taxonomy(item.object)
        item.type_label = taxonomy.singular_label if taxonomy else item.object
        term = await self.terms.get_term(absint(item.object_id), item.object)
        if term is None or taxonomy is None:
            item.invalid = True
            return term.name if term else ""
        item.url = self._link({"taxonomy": term.taxonomy, "term": term.slug})
        return term.name

    def permalink(self, post: PostLike) -> str:
        if post.post_type == "page":
            return self._link({"page_id": post.id})
        if post.post_type == "post":
            return self._link({"p": post.id})
        return self._link({"post_type": post.post_type, "p": post.id})

    def _link(self, query: dict) -> str:
        return f"{self.site_url}/?{urlencode(query)}"
