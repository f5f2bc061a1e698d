from zokey.data.categories import currency_for_region, find_subcategory, get_catalog


def test_catalog_shape():
    catalog = get_catalog("GBP")
    assert [c.id for c in catalog] == ["electronics", "home", "beauty", "fitness", "toys", "fashion"]
    assert sum(len(c.subcategories) for c in catalog) == 16


def test_catalog_is_memoised_per_currency():
    assert get_catalog("GBP") is get_catalog("GBP")
    assert get_catalog("USD") is not get_catalog("GBP")
    assert get_catalog("EUR") is get_catalog("GBP")


def test_budget_question_follows_currency():
    _, laptops = find_subcategory(get_catalog("USD"), "laptops")
    budget = next(q for q in laptops.questions if q.id == "budget")

    assert budget.type == "range"
    assert budget.range_config.currency == "USD"
    assert budget.range_config.presets[0].label == "Under $100"


def test_find_subcategory():
    category, subcategory = find_subcategory(get_catalog(), "airfryer")
    assert category.id == "home"
    assert subcategory.category_id == "home"
    assert find_subcategory(get_catalog(), "nope") is None


def test_currency_for_region():
    assert currency_for_region("US") == "USD"
    assert currency_for_region("UK") == "GBP"
    assert currency_for_region("DE") == "GBP"
