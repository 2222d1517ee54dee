class Urls:
    COMMUNITY = "https://steamcommunity.com"
    API = "https://api.steampowered.com"
    STORE = "https://store.steampowered.com"

    INVENTORY = f"{COMMUNITY}/inventory"
    PROFILES = f"{COMMUNITY}/profiles"
    MOBILECONF = f"{COMMUNITY}/mobileconf"
    QUERY_TIME = f"{API}/ITwoFactorService/QueryTime/v0001"

    MARKET = f"{COMMUNITY}/market"
    MARKET_PRICE_OVERVIEW = f"{MARKET}/priceoverview/"
    MARKET_PRICE_HISTORY = f"{MARKET}/pricehistory/"
    MARKET_SEARCH = f"{MARKET}/search/render/"
    MARKET_MY_LISTINGS = f"{MARKET}/mylistings"
