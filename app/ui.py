# Run from project root: streamlit run app/ui.py
# UI talks to backend API (GET /api/recalls, POST /api/summarize). Start the API first.

import os
from datetime import date

import requests
import streamlit as st

# Backend config
API_BASE = os.environ.get("API_BASE", "http://localhost:3000")

st.title("Toy Recall Radar")
st.caption("Toy-related recalls from the U.S. CPSC, with optional parent-facing summaries.")

# Backend status (on every render)
try:
    r = requests.get(f"{API_BASE}/health", timeout=5)
    if not r.ok:
        st.caption("Backend returned an error on /health.")
except requests.RequestException:
    st.caption("Backend not reachable — start the API first.")

with st.form("search_form"):
    q = st.text_input("Keyword", placeholder="toy")
    col_start, col_end = st.columns(2)
    use_dates = st.checkbox("Filter by recall date")
    start = col_start.date_input("From", value=date(date.today().year, 1, 1))
    end = col_end.date_input("To", value=date.today())
    limit = st.slider("Max results", min_value=1, max_value=100, value=20)
    for_age = st.text_input("Child age (for summaries)", placeholder="3+")
    submitted = st.form_submit_button("Search")

if submitted:
    params = {"limit": str(limit)}
    if q.strip():
        params["q"] = q.strip()
    if use_dates:
        params["start"] = start.isoformat()
        params["end"] = end.isoformat()
    try:
        r = requests.get(f"{API_BASE}/api/recalls", params=params, timeout=60)
        if r.ok:
            st.session_state.recalls = r.json().get("items") or []
        else:
            st.session_state.recalls = []
            st.error(f"Search failed: {r.status_code} — {r.text[:200]}")
    except requests.RequestException as e:
        st.session_state.recalls = []
        st.error(f"Request failed: {e}")

recalls = st.session_state.get("recalls") or []
if submitted or recalls:
    st.subheader(f"{len(recalls)} recall(s)")

for rec in recalls:
    with st.container(border=True):
        title = rec.get("title") or "(untitled)"
        st.markdown(f"**[{title}]({rec.get('url') or '#'})**" if rec.get("url") else f"**{title}**")
        st.caption(" · ".join(x for x in (rec.get("published"), rec.get("hazard"), rec.get("remedy")) if x))
        images = rec.get("images") or []
        if images:
            st.image(images[:3], width=120)
        products = ", ".join(p.get("name") or "" for p in rec.get("products") or [] if p.get("name"))
        if products:
            st.caption(f"Products: {products}")

        key = f"summary_{rec.get('id')}"
        if st.button("Summarize for parents", key=f"btn_{key}"):
            text = "\n".join(x for x in (rec.get("title"), rec.get("description"), rec.get("hazard"), rec.get("remedy")) if x)
            payload = {"text": text}
            if for_age.strip():
                payload["forAge"] = for_age.strip()
            try:
                r = requests.post(f"{API_BASE}/api/summarize", json=payload, timeout=90)
                data = r.json()
                if r.ok:
                    st.session_state[key] = data.get("summary", "")
                elif r.status_code == 501:
                    st.warning("No LLM API key configured on the backend.")
                else:
                    st.error(f"{data.get('error', 'Summarize failed')}: {data.get('detail', '')}")
            except (requests.RequestException, ValueError) as e:
                st.error(f"Request failed: {e}")
        if st.session_state.get(key):
            st.markdown(st.session_state[key])
