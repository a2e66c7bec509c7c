import matplotlib as mpl

from cavitation_checker.constants import DARK_COLORS, PLOT_STYLE_LIGHT
from cavitation_checker.theme import apply_plot_style, banner_style, get_dark_stylesheet


def test_stylesheet_uses_palette():
    sheet = get_dark_stylesheet()
    assert DARK_COLORS["bg"] in sheet
    assert "QTableWidget" in sheet
    assert "{{" not in sheet


def test_banner_styles():
    assert DARK_COLORS["red"] in banner_style("error")
    assert DARK_COLORS["green"] in banner_style("success")
    assert DARK_COLORS["fg_dim"] in banner_style("")


def test_apply_plot_style():
    with mpl.rc_context():
        apply_plot_style(PLOT_STYLE_LIGHT)
        assert mpl.rcParams["axes.facecolor"] == "#ffffff"
        assert mpl.rcParams["xtick.labelsize"] == 7
