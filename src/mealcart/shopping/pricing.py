"""Estimated prices for common ingredients when no offer matches."""

# Typical Danish supermarket prices (DKK) per purchase unit
ESTIMATED_PRICES: dict[str, float] = {
    # Dairy
    "mælk": 12, "letmælk": 12, "minimælk": 12, "sødmælk": 14,
    "smør": 25, "margarine": 18,
    "ost": 35, "cheddar": 40, "parmesan": 45, "mozzarella": 30, "feta": 28,
    "fløde": 15, "piskefløde": 18, "cremefraiche": 16, "creme fraiche": 16,
    "yoghurt": 15, "skyr": 18, "græsk yoghurt": 20,
    "æg": 30, "æg 10 stk": 35, "æg 6 stk": 22,
    # Meat and fish
    "kylling": 45, "kyllingebryst": 55, "kyllingelår": 40, "hel kylling": 50,
    "hakket oksekød": 50, "oksekød": 65, "bøf": 80, "roastbeef": 90,
    "hakket svinekød": 40, "svinekød": 50, "nakkefilet": 55, "schnitzel": 45,
    "flæsk": 35, "bacon": 30, "skinke": 35,
    "laks": 70, "torsk": 60, "rødspætte": 55, "tun": 25, "rejer": 50,
    "pølser": 25, "medister": 30,
    # Vegetables
    "kartofler": 15, "kartoffel": 15, "nye kartofler": 18,
    "løg": 8, "rødløg": 10, "forårsløg": 12, "porrer": 15,
    "hvidløg": 10, "hvidløgsfed": 10,
    "gulerødder": 12, "gulerod": 12,
    "tomat": 15, "tomater": 15, "cherrytomater": 18, "hakkede tomater": 10,
    "agurk": 10, "salat": 15, "iceberg": 15, "rucola": 18,
    "spinat": 18, "broccoli": 15, "blomkål": 18, "grønkål": 15,
    "peberfrugt": 12, "chili": 8, "jalapeño": 10,
    "squash": 12, "aubergine": 15, "champignon": 18, "svampe": 18,
    "avocado": 15, "majs": 12, "ærter": 15, "bønner": 12,
    "kål": 12, "hvidkål": 12, "rødkål": 15, "spidskål": 15,
    "selleri": 15, "ingefær": 12, "citron": 8, "lime": 8,
    # Fruit
    "æble": 15, "æbler": 15, "banan": 12, "bananer": 12,
    "appelsin": 18, "appelsiner": 18, "citrus": 15,
    "jordbær": 25, "hindbær": 30, "blåbær": 28,
    "vindrue": 25, "vindruer": 25, "melon": 20,
    # Dry goods
    "pasta": 15, "spaghetti": 15, "penne": 15, "fusilli": 15, "makaroni": 15,
    "ris": 20, "jasminris": 22, "basmatiris": 25, "brune ris": 22,
    "mel": 12, "hvedemel": 12,
    "sukker": 15, "rørsukker": 18, "flormelis": 12,
    "salt": 8, "peber": 15, "krydderier": 18,
    "olie": 30, "olivenolie": 45, "rapsolie": 25,
    "eddike": 15, "balsamico": 25,
    "sojasauce": 18, "fiskesauce": 20,
    "tomatpuré": 12, "tomatsauce": 15,
    "bouillon": 15, "hønsebouillon": 15, "oksebouillon": 15,
    "kokosmælk": 18, "kokoscreme": 20,
    # Bread
    "brød": 20, "rugbrød": 22, "franskbrød": 15, "toastbrød": 18,
    "boller": 15, "pitabrød": 18, "tortilla": 20, "wraps": 20,
    "havregryn": 18, "müsli": 30, "cornflakes": 25,
    # Other
    "kaffe": 40, "te": 25,
    "honning": 35, "marmelade": 20, "nutella": 35,
    "mayonnaise": 20, "ketchup": 18, "sennep": 15, "dressing": 20,
}  # fmt: skip


def find_estimated_price(
    name: str,
    prices: dict[str, float] | None = None,
) -> float | None:
    """
    Look up an estimated price for an ingredient.

    An exact key wins; otherwise the first key (in table order) that contains
    the name or is contained in it.
    """
    table = ESTIMATED_PRICES if prices is None else prices
    key = name.casefold().strip()
    if not key:
        return None

    if key in table:
        return table[key]

    for candidate, price in table.items():
        if key in candidate or candidate in key:
            return price
    return None
