from typing import Dict, Tuple

# Compiled-in site list; order within a group is the display order.
SITES: Dict[str, Tuple[str, ...]] = {
    "server1": (
        "https://brahamand.ai",
        "https://subvivah.com",
        "https://foodfly.co",
        "https://customerzone.in",
        "https://tutorbuddy.co",
    ),
    "server2": (
        "https://chitbox.co",
        "https://connectflow.co.in",
        "https://amenties.rozgarhub.co",
        "https://orbitx.zone",
    ),
}

GROUP_TITLES: Dict[str, str] = {
    "server1": "Server 1",
    "server2": "Server 2",
}
