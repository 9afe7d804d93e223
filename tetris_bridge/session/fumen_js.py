"""JavaScript snippets for fumen editor interaction.

Single source of truth for the JS code run via Selenium
``execute_script()`` against the fumen editor page: reading the field
array and page cursor, page navigation, drawing, and encoding the
current document into a shareable token.

The editor keeps its state in page-level globals: ``f`` is the field of
the current page (240 integer cells, the first 30 of which sit above
the visible 20 x 10 board), ``frame`` is the 0-based current page and
``framemax`` the number of pages.  Page changes go through the editor's
own handlers so that its undo stack and rendering stay consistent.
"""

# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

READ_FIELD_JS = """
return (function() {
    if (typeof f === 'undefined') return null;
    var out = [];
    for (var i = 0; i < f.length; i++) out.push(typeof f[i] === 'number' ? f[i] : null);
    return out;
})();
"""

PAGE_NUMBER_JS = "return frame;"

PAGE_COUNT_JS = "return framemax;"

# ---------------------------------------------------------------------------
# Board mutation
# ---------------------------------------------------------------------------

# arguments[0]: header offset.  Returns false if the field is missing.
CLEAR_FIELD_JS = """
return (function(offset) {
    if (typeof f === 'undefined' || f.length < offset + 200) return false;
    for (var i = offset; i < offset + 200; i++) f[i] = 0;
    pushframe(frame);
    refresh();
    return true;
})(arguments[0]);
"""

# arguments[0]: board index, arguments[1]: color code, arguments[2]: header offset.
DRAW_PIXEL_JS = """
return (function(index, color, offset) {
    f[offset + index] = color;
    pushframe(frame);
    refresh();
    return f[offset + index];
})(arguments[0], arguments[1], arguments[2]);
"""

# ---------------------------------------------------------------------------
# Page navigation
# ---------------------------------------------------------------------------

NEXT_PAGE_JS = """
pushframe(frame);
if (frame + 1 >= framemax) {
    framemax = frame + 2;
    for (var i = 0; i < f.length; i++) fldbuf[frame + 1][i] = 0;
}
popframe(frame + 1);
refresh();
return frame;
"""

PREVIOUS_PAGE_JS = """
if (frame <= 0) return frame;
pushframe(frame);
popframe(frame - 1);
refresh();
return frame;
"""

# arguments[0]: 0-based target page.
GOTO_PAGE_JS = """
return (function(target) {
    pushframe(frame);
    if (target >= framemax) framemax = target + 1;
    popframe(target);
    refresh();
    return frame;
})(arguments[0]);
"""

REMOVE_NEXT_PAGES_JS = """
framemax = frame + 1;
refresh();
return framemax;
"""

RESET_JS = """
framemax = 1;
for (var i = 0; i < f.length; i++) f[i] = 0;
pushframe(0);
popframe(0);
refresh();
return framemax;
"""

# ---------------------------------------------------------------------------
# Sharing
# ---------------------------------------------------------------------------

# Runs the editor's encoder and returns the generated token (e.g. "v115@...").
ENCODE_JS = """
encode();
var box = document.getElementById('tx');
return box ? box.value : '';
"""
