"""HTML fragments and labels shown around the graph canvas."""

import html

from papertrail.memory.entities import Entity, Relation
from papertrail.ui.theme import COLORS, entity_badge_style


def render_summary_text(entity_count: int, relation_count: int, linked_count: int | None) -> str:
    """Summary line under the toolbar.

    Args:
        entity_count: Visible entities.
        relation_count: Visible relations.
        linked_count: Neighbors of the selection, or None when nothing is selected.
    """
    text = f"{entity_count} entities · {relation_count} connections"
    if linked_count is not None:
        text += f" · {linked_count} linked"
    return text


def _plural(count: int, noun: str) -> str:
    return f"1 {noun}" if count == 1 else f"{count} {noun}s"


def format_connection_label(other: Entity, relation: Relation) -> str:
    """Text of one connection row in the detail panel, e.g. "Ada Lovelace ×2"."""
    return f"{other.name} ×{relation.strength:g}"


def render_entity_header_html(entity: Entity) -> str:
    """Render the top of the detail panel: name, type badge and mention count.

    Args:
        entity: Selected entity.

    Returns:
        HTML string.
    """
    return f"""
    <div>
        <div style="font-size: 20px; font-weight: 700;">{html.escape(entity.name)}</div>
        <div style="display: flex; gap: 8px; align-items: center; margin-top: 6px;">
            <span style="{entity_badge_style(entity.type)}">{html.escape(entity.type)}</span>
            <span style="color: {COLORS["text_muted"]}; font-size: 12px;">{_plural(entity.mention_count, "mention")}</span>
        </div>
    </div>
    """


def render_entity_footer_html(entity: Entity, hidden_connections: int = 0) -> str:
    """Render the bottom of the detail panel.

    Args:
        entity: Selected entity.
        hidden_connections: Connections left out of the listed rows.

    Returns:
        HTML string with the "+n more connections" line and the article count.
    """
    more = ""
    if hidden_connections > 0:
        more = (
            f'<div style="color: {COLORS["text_muted"]}; font-size: 12px;">'
            f"+{hidden_connections} more connections</div>"
        )
    return f"""
    <div>
        {more}
        <div style="color: {COLORS["text_muted"]}; font-size: 12px; margin-top: 12px;">
            Appears in {_plural(len(entity.article_ids), "article")}
        </div>
    </div>
    """


def render_empty_state_html() -> str:
    """Placeholder shown when the graph has no entities."""
    return f"""
    <div style="text-align: center; padding: 48px 16px; color: {COLORS["text_muted"]};">
        <div style="font-size: 20px; font-weight: 700; color: {COLORS["text"]};">No entities yet</div>
        <div style="margin-top: 8px;">
            Build the graph to extract people, organizations and topics from your articles.
        </div>
    </div>
    """
