# screens/admin/__init__.py
"""
Admin panel

Main components:
- main: tab layout and logout (entry point, render(state))
- tab_home / tab_team / tab_events / tab_gallery / tab_admins: one editor per resource

Every tab reads from AppState.cache and writes through AppState mutations.
"""
