"""
Mission catalog and lifecycle.

Modules
-------
catalog   : MISSION_CATALOG (immutable) + read accessors.
lifecycle : generate_mission_id() + build_mission() + MissionManager
            (create / log / start / complete / abandon / delete).
"""
