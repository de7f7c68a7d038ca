class Colors:
    """Color palette for the application UI."""

    FG_BLACK = "#111111"
    FG_MUTED = "#7a7067"

    BG_DARK = "#332f2a"
    BG_MEDIUM_DARK = "#3a352f"
    BG_HOVER_DARK = "#7a889a"
    FG_LIGHT = "#c8c1b7"
    BORDER_DARK = "#595148"

    SELECT_BG = "#6f7f94"
    SELECT_FG = "#ece4d9"

    LOADED_DOT = "#4caf50"
    LONG_PRESS = "#e0a33a"


class Styles:
    """Reusable stylesheet templates."""

    @staticmethod
    def url_button(frame_status, top=False):
        weight = "bold" if frame_status.is_active else "normal"
        color = Colors.SELECT_FG if frame_status.is_active else Colors.FG_LIGHT
        background = Colors.SELECT_BG if frame_status.is_active else Colors.BG_MEDIUM_DARK
        # Loaded frames get a colored edge, unloaded ones stay flat
        edge_color = Colors.LOADED_DOT if frame_status.is_loaded else "transparent"
        edge = "border-bottom" if top else "border-right"
        return f"""
            QPushButton {{
                font-weight: {weight};
                background-color: {background};
                color: {color};
                border: 1px solid {Colors.BORDER_DARK};
                {edge}: 3px solid {edge_color};
                border-radius: 0px;
                padding: 8px 12px;
                text-align: left;
                outline: none;
            }}
            QPushButton:hover {{
                background-color: {Colors.BG_HOVER_DARK};
                color: #ffffff;
            }}
            QPushButton:focus {{
                outline: none;
            }}
        """

    @staticmethod
    def group_header():
        return f"""
            QPushButton {{
                background-color: {Colors.BG_DARK};
                color: {Colors.FG_LIGHT};
                border: none;
                border-bottom: 1px solid {Colors.BORDER_DARK};
                padding: 8px 10px;
                text-align: left;
                font-weight: bold;
                outline: none;
            }}
            QPushButton:hover {{
                background-color: {Colors.BG_HOVER_DARK};
                color: #ffffff;
            }}
        """

    @staticmethod
    def long_press_bar():
        return f"""
            QProgressBar {{
                background-color: transparent;
                border: none;
            }}
            QProgressBar::chunk {{
                background-color: {Colors.LONG_PRESS};
            }}
        """

    @staticmethod
    def panel():
        return f"background-color: {Colors.BG_DARK}; color: {Colors.FG_LIGHT};"

    @staticmethod
    def info_label(color=Colors.FG_BLACK):
        return f"""
            QLabel {{
                color: {color};
                background-color: transparent;
                padding: 4px;
                font-size: 13px;
                selection-background-color: transparent;
                selection-color: {color};
            }}
        """
