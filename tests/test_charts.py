import plotly.graph_objects as go

from streamlit_app.utils import charts
from streamlit_app.utils.color_utils import ColorRecord, SortMethod, sort_and_group

RED = ColorRecord('Red', 255, 0, 0)
GREEN = ColorRecord('Green', 0, 255, 0)
BLUE = ColorRecord('Blue', 0, 0, 255)


def test_build_stripes_inserts_dividers_between_groups():
    groups = sort_and_group([RED, GREEN, BLUE], SortMethod.LUMINOSITY, 3)
    stripes = charts.build_stripes(groups)

    assert [stripe.kind for stripe in stripes] == ['stripe', 'divider', 'stripe', 'divider', 'stripe']
    assert [stripe.key for stripe in stripes] == [
        'stripe-0-0', 'divider-1', 'stripe-1-0', 'divider-2', 'stripe-2-0'
    ]
    assert [stripe.record for stripe in stripes if stripe.kind == 'stripe'] == [BLUE, RED, GREEN]


def test_build_stripes_single_group_has_no_divider():
    stripes = charts.build_stripes([[BLUE, RED, GREEN]])
    assert all(stripe.kind == 'stripe' for stripe in stripes)
    assert len(stripes) == 3


def test_build_stripes_keeps_dividers_for_empty_groups():
    stripes = charts.build_stripes([[RED, RED], [], []])
    assert [stripe.kind for stripe in stripes] == ['stripe', 'stripe', 'divider', 'divider']


def test_create_stripe_list_html():
    html = charts.create_stripe_list_html([[BLUE], [RED]])

    assert html.count('class="stripe"') == 2
    assert html.count('class="divider"') == 1
    assert 'background-color:rgb(0,0,255)' in html
    assert html.index('>Blue<') < html.index('divider-1') < html.index('>Red<')


def test_create_stripe_list_html_escapes_titles():
    html = charts.create_stripe_list_html([[ColorRecord('<b>Bold & Co</b>', 1, 2, 3)]])
    assert '&lt;b&gt;Bold &amp; Co&lt;/b&gt;' in html
    assert '<b>' not in html


def test_create_stripe_list_html_empty():
    assert charts.create_stripe_list_html([[], [], []]) == ""


def test_create_stripe_page_html():
    page = charts.create_stripe_page_html([[BLUE, RED]], title="Shelf", method='invertedStep')
    assert page.startswith('<!DOCTYPE html>')
    assert '<title>Shelf</title>' in page
    assert '2 colors · Inverted Step · 1 group' in page
    assert 'rgb(255,0,0)' in page


def test_create_groups_dataframe():
    df = charts.create_groups_dataframe([[BLUE], [], [RED, GREEN]])

    assert list(df.columns) == charts.DATAFRAME_COLUMNS
    assert df['title'].tolist() == ['Blue', 'Red', 'Green']
    assert df['position'].tolist() == [0, 1, 2]
    assert df['group'].tolist() == [0, 2, 2]
    assert df['hex'].tolist() == ['#0000FF', '#FF0000', '#00FF00']
    assert df['step_key'].tolist() == ['5,-25,0', '0,62,8', '2,106,8']


def test_create_groups_dataframe_empty():
    df = charts.create_groups_dataframe([[]])
    assert df.empty
    assert list(df.columns) == charts.DATAFRAME_COLUMNS


def test_create_luminosity_profile():
    groups = [[BLUE], [RED], [GREEN]]
    fig = charts.create_luminosity_profile(groups)

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert list(fig.data[0].y) == charts.create_groups_dataframe(groups)['luminosity'].tolist()
    assert [shape.x0 for shape in fig.layout.shapes] == [0.5, 1.5]
