import logging

import streamlit as st

from src.config import settings
from src.ui.layout import render_dashboard


def main() -> None:
    logging.basicConfig(level=settings.DEFAULT_LOG_LEVEL, format=settings.LOG_FORMAT)
    st.set_page_config(
        page_title="Bitcoin vs. Home Strategy Projector",
        layout="wide",
    )
    render_dashboard()


if __name__ == "__main__":
    main()
