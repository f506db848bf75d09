"""
Stripe rendering and chart components using Plotly.
"""
import html
from typing import List, NamedTuple, Optional

import pandas as pd
import plotly.graph_objects as go

from .color_utils import ColorRecord, SortMethod, rgb_to_hls, rgb_to_hsv, record_luminosity, step_sort_key

DIVIDER_STYLE = "height:5px;background-color:#000;"
STRIPE_STYLE = "color:white;font-weight:bold;padding:10px 16px;"
CARD_STYLE = "max-height:80vh;overflow-y:auto;border:1px solid #f0f0f0;border-radius:12px;"

DATAFRAME_COLUMNS = [
    'position', 'group', 'title', 'r', 'g', 'b', 'hex',
    'luminosity', 'hsv_h', 'hls_h', 'step_key',
]


class Stripe(NamedTuple):
    """One rendered block: a group divider or a colored stripe."""
    kind: str
    key: str
    record: Optional[ColorRecord] = None


def build_stripes(groups: List[List[ColorRecord]]) -> List[Stripe]:
    """
    Flatten grouped records into the stripe sequence.

    Every group after the first is preceded by a divider, empty groups included.

    Args:
        groups: Records per luminosity group, in display order

    Returns:
        List of Stripe entries
    """
    stripes = []
    for index, group in enumerate(groups):
        if index > 0:
            stripes.append(Stripe('divider', f"divider-{index}"))
        for idx, record in enumerate(group):
            stripes.append(Stripe('stripe', f"stripe-{index}-{idx}", record))
    return stripes


def create_stripe_list_html(groups):
    """
    Create HTML for the sorted stripe list.

    Args:
        groups: Records per luminosity group

    Returns:
        HTML string, empty when there are no records
    """
    if not any(groups):
        return ""

    parts = []
    for stripe in build_stripes(groups):
        if stripe.kind == 'divider':
            parts.append(f'<div class="divider" id="{stripe.key}" style="{DIVIDER_STYLE}"></div>')
        else:
            record = stripe.record
            parts.append(
                f'<div class="stripe" id="{stripe.key}" '
                f'style="background-color:{record.css};{STRIPE_STYLE}">'
                f'{html.escape(record.title)}</div>'
            )

    return ''.join(parts)


def create_stripe_page_html(groups, title="Sorted Colors", method=SortMethod.LUMINOSITY):
    """
    Create a standalone HTML page around the stripe list.

    Args:
        groups: Records per luminosity group
        title: Page heading
        method: Sort method shown in the subtitle

    Returns:
        HTML document string
    """
    method = SortMethod.parse(method)
    n_colors = sum(len(group) for group in groups)
    subtitle = f"{n_colors} colors · {method.label} · {len(groups)} group{'s' if len(groups) != 1 else ''}"

    return f'''<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{html.escape(title)}</title>
</head>
<body style="font-family:'Segoe UI',sans-serif;margin:20px;">
<h2>{html.escape(title)}</h2>
<p style="color:#666;">{subtitle}</p>
<div style="{CARD_STYLE}">
{create_stripe_list_html(groups)}
</div>
</body>
</html>
'''


def create_groups_dataframe(groups):
    """
    Create a table of records with their derived sort metrics.

    Args:
        groups: Records per luminosity group

    Returns:
        DataFrame with one row per record, in display order
    """
    rows = []
    position = 0
    for group_index, group in enumerate(groups):
        for record in group:
            rows.append({
                'position': position,
                'group': group_index,
                'title': record.title,
                'r': record.r,
                'g': record.g,
                'b': record.b,
                'hex': record.hex,
                'luminosity': round(record_luminosity(record), 4),
                'hsv_h': round(rgb_to_hsv(*record.rgb)[0], 4),
                'hls_h': round(rgb_to_hls(*record.rgb)[0], 4),
                'step_key': step_sort_key(*record.rgb),
            })
            position += 1

    return pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)


def create_luminosity_profile(groups, title="Luminosity Profile"):
    """
    Create bar chart of luminosity along the display order.

    Bars take their record's color; dashed lines mark group boundaries.

    Args:
        groups: Records per luminosity group
        title: Chart title

    Returns:
        Plotly figure
    """
    df = create_groups_dataframe(groups)

    fig = go.Figure(data=go.Bar(
        x=df['position'],
        y=df['luminosity'],
        marker_color=df['hex'],
        marker_line=dict(color='#ccc', width=1),
        customdata=df[['title', 'group']].values,
        hovertemplate='%{customdata[0]}<br>Group: %{customdata[1]}<br>Luminosity: %{y:.2f}<extra></extra>'
    ))

    # Boundary sits between the last bar of one group and the first of the next
    boundary = -0.5
    for group in groups[:-1]:
        boundary += len(group)
        fig.add_vline(x=boundary, line_dash='dash', line_color='#000')

    fig.update_layout(
        title=title,
        xaxis_title="Position",
        yaxis_title="Luminosity",
        height=400,
        bargap=0.1
    )

    return fig
