"""Theme for the TUI.

Keeps colors out of the CSS: styles refer to theme variables only, so a
new look is a new Theme registered in the app.
"""

from textual.theme import Theme

# Nord palette; polar night backgrounds with frost accents
NEALLM_DARK = Theme(
    name="neallm-dark",
    primary="#88c0d0",      # frost - user messages, focus
    secondary="#b48ead",    # aurora purple - assistant messages
    accent="#ebcb8b",       # settings dialog
    foreground="#eceff4",
    background="#242933",
    surface="#2e3440",
    panel="#3b4252",
    success="#a3be8c",      # connected, send button
    warning="#d08770",      # connecting, thinking indicator
    error="#bf616a",        # disconnected alert
    dark=True,
    variables={
        "border": "#4c566a",
        "border-blurred": "#3b4252",
        "input-cursor-background": "#eceff4",
        "input-cursor-foreground": "#242933",
        "input-selection-background": "#88c0d0 35%",
        "scrollbar": "#3b4252",
        "scrollbar-hover": "#4c566a",
        "scrollbar-active": "#88c0d0",
        "scrollbar-background": "#2e3440",
        "footer-background": "#242933",
        "footer-key-foreground": "#ebcb8b",
        "text-muted": "#7b88a1",
    },
)
