"""
Shared test fixtures for the bdl test suite.
"""

import pytest

GREETING_DOCUMENT = """\
# Topic: Greeting
# Required: shop.bdl

@start
Hello there.
{continue: @end}

@end
Goodbye.
"""

FULL_DOCUMENT = """\
# Topic: Market
# Description: Talking to the merchant
# Author: Test Author
# Version: 1.0
# Required: shop.bdl, quests.bdl

$global_vars: {
    player_name: "",
    gold: 10,
    has_key: false
}

$local_vars: {
    attempts: 0,
}

@start
Welcome, ${player_name}!
You have ${gold} gold.
!{check_inventory -> has_sword, has_shield}
{buy|purchase: [shop.bdl:buy]}
?{has_key}{open: @vault}
{quest: [quests.bdl:intro]}
{bye|leave: exit}

@vault
The vault creaks open.
{back: @start}
"""


@pytest.fixture
def greeting_text():
    """The minimal two-node greeting document."""
    return GREETING_DOCUMENT


@pytest.fixture
def full_text():
    """A document exercising every construct of the language."""
    return FULL_DOCUMENT


@pytest.fixture
def dependencies():
    """Validated dependency set used by node parsing tests."""
    return frozenset({"module1.bdl", "module2.bdl"})
