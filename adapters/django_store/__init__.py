"""
TrackSure Django custody store.
ORM-backed CustodyStore over the persisted registry layout.
"""
