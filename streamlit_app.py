#!/usr/bin/env python3
from __future__ import annotations

import streamlit as st

from barber_prices.config import load_settings
from barber_prices.fetch import HttpPageFetcher
from barber_prices.pipeline import PipelineResult, run_pipeline
from barber_prices.sources.factory import build_registry
from barber_prices.stats import format_rsd, observations_frame, samples_by_source, stats, stats_frame

STAT_CARDS = [
    ("haircut", "Muško šišanje (haircut)"),
    ("beard", "Brada / brijanje (beard)"),
    ("wash", "Pranje kose (wash)"),
]


def _refresh() -> PipelineResult:
    settings = load_settings()
    fetcher = HttpPageFetcher(
        timeout_seconds=settings.timeout_seconds,
        max_retries=settings.max_retries,
        user_agent=settings.user_agent,
    )
    return run_pipeline(build_registry(), fetcher, max_workers=settings.max_workers)


def _stat_card(title: str, category: str, result: PipelineResult) -> None:
    s = stats(result.observations, category)
    with st.container(border=True):
        st.subheader(title)
        c1, c2, c3 = st.columns(3)
        c1.metric("Min", format_rsd(s.min))
        c2.metric("Prosek", format_rsd(s.avg))
        c3.metric("Max", format_rsd(s.max))


def main() -> None:
    st.set_page_config(page_title="Niš Barber Prices")
    st.title("Niš Barber Prices")

    # Results live only in this session; a new refresh replaces them.
    if st.button("Refresh") or "result" not in st.session_state:
        with st.spinner("Refreshing..."):
            st.session_state["result"] = _refresh()
    result: PipelineResult = st.session_state["result"]

    for category, title in STAT_CARDS:
        _stat_card(title, category, result)

    st.dataframe(stats_frame(result.observations), column_config={"min": "Min", "avg": "Prosek", "max": "Max"})

    st.markdown("**Uzorkovani izvori (Niš):**")
    for src, line in samples_by_source(result.observations).items():
        st.write(f"• {src}: {line}")

    with st.expander("Sve cene"):
        st.dataframe(observations_frame(result.observations), hide_index=True)

    if result.all_failed:
        st.error("Greška: nijedan izvor nije dostupan.")
    for src, err in result.errors.items():
        st.caption(f"Greška ({src}): {err}")

    st.caption(
        "Napomena: Ovo su javno objavljene cene sa sajtova za Niš. "
        "Ako sajt promeni izgled, parser treba osvežiti. Uvek proveri cenu pri rezervaciji."
    )


main()
