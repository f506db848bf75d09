"""
Color Stripe Sorter

A Streamlit app that sorts a pasted list of named colors (e.g. book spines) by
luminosity, hue or step ordering and shows them as stripes split into
luminosity groups.
"""
import streamlit as st
from utils import charts, color_utils, data_loader
from utils.color_utils import SortMethod

# Page configuration
st.set_page_config(
    page_title="Color Stripe Sorter",
    page_icon="📚",
    layout="wide",
    initial_sidebar_state="expanded"
)


def load_example():
    st.session_state.color_input = data_loader.load_sample_palette()


def run_sort():
    """Parse the current input and store the grouped result for display."""
    records = data_loader.parse_color_lines(st.session_state.color_input)
    method = st.session_state.sort_method
    st.session_state.sorted_groups = color_utils.sort_and_group(
        records, method, st.session_state.group_count
    )
    st.session_state.sorted_method = method


# Sidebar input
st.sidebar.title("Book Color Input")
st.sidebar.text_area(
    "Colors",
    key="color_input",
    placeholder="Paste lines like: book title rgb(233,24,22)",
    height=28 * 24,
    label_visibility="collapsed"
)
st.sidebar.button("Load example", key="load_example", on_click=load_example, use_container_width=True)

# Sorting controls
st.header("Sorting Options")

method_col, groups_col, button_col = st.columns([2, 2, 1])

with method_col:
    st.selectbox(
        "Sort method",
        list(SortMethod),
        index=0,
        format_func=lambda method: method.label,
        key="sort_method"
    )

with groups_col:
    st.slider(
        "Groups",
        min_value=color_utils.MIN_GROUPS,
        max_value=color_utils.MAX_GROUPS,
        value=color_utils.DEFAULT_GROUP_COUNT,
        key="group_count"
    )

with button_col:
    st.markdown("<div style='height: 28px;'></div>", unsafe_allow_html=True)  # Align with inputs
    st.button("Sort Now", key="sort_now", type="primary", on_click=run_sort, use_container_width=True)

# Output stays until the next sort
groups = st.session_state.get("sorted_groups")

if groups is not None:
    stripes_html = charts.create_stripe_list_html(groups)

    with st.container(border=True):
        if stripes_html:
            st.markdown(
                f'<div style="max-height:80vh;overflow-y:auto;">{stripes_html}</div>',
                unsafe_allow_html=True
            )

    if any(groups):
        method = st.session_state.sorted_method

        col1, col2 = st.columns(2)
        col1.metric("Colors", sum(len(group) for group in groups))
        col2.metric("Groups", " / ".join(str(len(group)) for group in groups))

        with st.expander("Luminosity profile"):
            st.plotly_chart(charts.create_luminosity_profile(groups), use_container_width=True)

        df = charts.create_groups_dataframe(groups)
        with st.expander("Details"):
            st.dataframe(df, hide_index=True, use_container_width=True)

        csv_col, html_col = st.columns(2)
        csv_col.download_button(
            label="⬇️ Download CSV",
            data=df.to_csv(index=False),
            file_name="sorted_colors.csv",
            mime="text/csv"
        )
        html_col.download_button(
            label="⬇️ Download HTML",
            data=charts.create_stripe_page_html(groups, method=method),
            file_name="sorted_colors.html",
            mime="text/html"
        )
