"""Plotly figure generation from a PlotSeriesSet.

Returns Plotly figure dicts (never go.Figure) and writes self-contained HTML
files. One marker-mode scatter trace per Y series; marker events become
vertical lines.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import plotly.io as pio

from scatters.render.theme import ThemeMode, get_theme_colors, get_theme_template, resolve_theme
from scatters.series_prep.column_types import AxisType
from scatters.series_prep.models import PlotSeries, PlotSeriesSet
from scatters.utils.logging import get_logger

logger = get_logger(__name__)

DOWNSAMPLED_SUFFIX = " (downsampled)"


@dataclass
class RenderOptions:
    """Rendering settings.

    Attributes:
        theme: DARK (default) or LIGHT (white theme).
        autoscale_y: If False, the Y axis keeps its initial padded range when zooming.
        max_decimals: Decimal places in hover labels; -1 means unlimited.
        large_mode_threshold: Series with more points use WebGL (Scattergl).
        marker_color: Color of marker-event vertical lines.
        point_size: Scatter point size.
    """
    theme: ThemeMode = ThemeMode.DARK
    autoscale_y: bool = True
    max_decimals: int = 2
    large_mode_threshold: int = 2000
    marker_color: str = "#c23531"
    point_size: int = 6

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme.value,
            "autoscale_y": self.autoscale_y,
            "max_decimals": self.max_decimals,
            "large_mode_threshold": self.large_mode_threshold,
            "marker_color": self.marker_color,
            "point_size": self.point_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderOptions":
        """Tolerant loader: unknown keys are ignored with a warning, bad values fall back to defaults."""
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Unknown key '{key}' in render options, ignoring")

        defaults = cls()
        kwargs: dict[str, Any] = {}
        if "theme" in data:
            kwargs["theme"] = resolve_theme(data["theme"])
        if "autoscale_y" in data:
            kwargs["autoscale_y"] = bool(data["autoscale_y"])
        for key in ("max_decimals", "large_mode_threshold", "point_size"):
            if key in data:
                try:
                    kwargs[key] = int(data[key])
                except (TypeError, ValueError):
                    logger.warning(f"Invalid {key}={data[key]!r}, using {getattr(defaults, key)}")
        if "marker_color" in data:
            kwargs["marker_color"] = str(data["marker_color"])
        return cls(**kwargs)


def hover_format(max_decimals: int) -> str:
    """d3 number format for hover labels (empty string = unformatted)."""
    if max_decimals is None or max_decimals < 0:
        return ""
    return f".{int(max_decimals)}f"


def padded_y_range(series: list[PlotSeries]) -> Optional[tuple[float, float]]:
    """Global Y range over numeric series, padded by 10% of the span.

    A zero span is padded by 1.0. Returns None when no finite values exist.
    """
    mins: list[float] = []
    maxs: list[float] = []
    for s in series:
        if s.y.axis_type is not AxisType.NUMERIC or len(s.y) == 0:
            continue
        vals = pd.to_numeric(s.y.values, errors="coerce").to_numpy(dtype=float)
        vals = vals[np.isfinite(vals)]
        if vals.size:
            mins.append(float(vals.min()))
            maxs.append(float(vals.max()))
    if not mins:
        return None
    lo, hi = min(mins), max(maxs)
    span = abs(hi - lo)
    pad = 1.0 if span == 0 else span * 0.10
    return lo - pad, hi + pad


def _trace(s: PlotSeries, options: RenderOptions, y_fmt: str) -> go.Scatter:
    trace_cls = go.Scattergl if len(s) > options.large_mode_threshold else go.Scatter
    y_hover = f"%{{y:{y_fmt}}}" if y_fmt else "%{y}"
    return trace_cls(
        x=s.x.to_list(),
        y=s.y.to_list(),
        mode="markers",
        name=s.name,
        marker=dict(size=options.point_size),
        hovertemplate=f"{s.name}<br>x=%{{x}}<br>y={y_hover}<extra></extra>",
    )


def make_figure(plot_set: PlotSeriesSet, options: Optional[RenderOptions] = None) -> dict:
    """Build a Plotly figure dict for a prepared series set.

    Args:
        plot_set: Output of SeriesPreparer.
        options: Rendering settings; defaults if None.

    Returns:
        Plotly figure dictionary.
    """
    options = options or RenderOptions()
    template = get_theme_template(options.theme)
    bg_color, fg_color = get_theme_colors(options.theme)
    y_fmt = hover_format(options.max_decimals)

    fig = go.Figure()
    for s in plot_set.series:
        fig.add_trace(_trace(s, options, y_fmt))

    for m in plot_set.markers:
        fig.add_vline(x=m.x, line_color=options.marker_color, line_width=2)

    title = plot_set.title + (DOWNSAMPLED_SUFFIX if plot_set.downsampled else "")
    xaxis: dict[str, Any] = dict(
        title=plot_set.x.name,
        type=plot_set.x.axis_type.plotly_axis_type,
        color=fg_color,
    )
    if plot_set.x.axis_type is AxisType.NUMERIC and y_fmt:
        xaxis["hoverformat"] = y_fmt

    yaxis: dict[str, Any] = dict(color=fg_color, fixedrange=not options.autoscale_y)
    if y_fmt:
        yaxis["hoverformat"] = y_fmt
    y_range = padded_y_range(list(plot_set.series))
    if y_range is not None:
        yaxis["range"] = list(y_range)

    fig.update_layout(
        title=dict(text=title),
        template=template,
        paper_bgcolor=bg_color,
        plot_bgcolor=bg_color,
        font=dict(color=fg_color),
        xaxis=xaxis,
        yaxis=yaxis,
        showlegend=True,
    )

    logger.debug(f"Figure generated: {len(plot_set.series)} traces, {len(plot_set.markers)} markers")
    return fig.to_dict()


# Runs in the written HTML page. On x-zoom, rescales Y to the points inside
# the visible X window (padded like the initial range); on x-autorange, restores
# the initial Y range.
Y_AUTOSCALE_SCRIPT = """
var gd = document.getElementById('{plot_id}');
var initialYRange = gd.layout.yaxis && gd.layout.yaxis.range ? gd.layout.yaxis.range.slice() : null;
function xCoord(v, i, isCategory) {
  if (isCategory) { return i; }
  if (typeof v === 'number') { return v; }
  var t = Date.parse(String(v).replace(' ', 'T'));
  return isNaN(t) ? Number(v) : t;
}
gd.on('plotly_relayout', function(ev) {
  if (ev['xaxis.autorange']) {
    if (initialYRange) { Plotly.relayout(gd, {'yaxis.range': initialYRange.slice()}); }
    return;
  }
  var lo, hi;
  if (ev['xaxis.range[0]'] !== undefined) {
    lo = ev['xaxis.range[0]'];
    hi = ev['xaxis.range[1]'];
  } else if (ev['xaxis.range']) {
    lo = ev['xaxis.range'][0];
    hi = ev['xaxis.range'][1];
  } else {
    return;
  }
  var isCategory = gd._fullLayout.xaxis.type === 'category';
  lo = xCoord(lo, lo, false);
  hi = xCoord(hi, hi, false);
  var yMin = Infinity, yMax = -Infinity;
  (gd._fullData || gd.data).forEach(function(trace) {
    if (trace.visible === false || trace.visible === 'legendonly') { return; }
    var xs = trace.x || [], ys = trace.y || [];
    for (var i = 0; i < ys.length; i++) {
      var x = xCoord(xs[i], i, isCategory);
      var y = Number(ys[i]);
      if (x >= lo && x <= hi && isFinite(y)) {
        if (y < yMin) { yMin = y; }
        if (y > yMax) { yMax = y; }
      }
    }
  });
  if (!isFinite(yMin)) { return; }
  var pad = yMax === yMin ? 1.0 : (yMax - yMin) * 0.1;
  Plotly.relayout(gd, {'yaxis.range': [yMin - pad, yMax + pad]});
});
"""


def write_html(
    figure: dict,
    path: Union[str, Path],
    options: Optional[RenderOptions] = None,
) -> Path:
    """Write a self-contained HTML file for ``figure``; creates parent dirs.

    With ``options.autoscale_y`` (the default) the page rescales Y on x-zoom.
    """
    options = options or RenderOptions()
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    post_script = Y_AUTOSCALE_SCRIPT if options.autoscale_y else None
    pio.write_html(figure, file=str(out), include_plotlyjs=True, full_html=True, post_script=post_script)
    return out
