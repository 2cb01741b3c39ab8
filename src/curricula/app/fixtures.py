"""
Fixture Units

Two sample units used to seed development and test stores.
"""

import logging
from typing import Any, Dict, List

from ..entities.types import ActivityType, CritType, ResourceType
from .resolver import UnitResolver
from .schemas import ActivityInput, Criterion, Details, Unit

logger = logging.getLogger(__name__)


def _age(lo: int, hi: int) -> Dict[str, Any]:
    return {"type": CritType.AGE, "min": lo, "max": hi}


def _interests(*topics: str) -> List[Dict[str, Any]]:
    return [{"type": CritType.INTEREST, "text": topic} for topic in topics]


def _links(type: ResourceType, *urls: str) -> List[Dict[str, Any]]:
    return [{"type": type, "url": url} for url in urls]


TITANIC: Dict[str, Any] = {
    "details": {
        "goal": "Learn about the Titanic",
        "benefits": "Which is great, because engineering failures teach us a lot "
                    "about building things.",
    },
    "criteria": [_age(6, 12)] + _interests("engineering", "robotics", "cartography"),
    "activities": [
        {
            "type": ActivityType.READ,
            "intro": "Read this stuff!",
            "resources": _links(
                ResourceType.BOOK,
                "https://www.amazon.com/Tonight-Titanic-Magic-Tree-House/dp/0679890637",
                "https://www.amazon.com/Titanic-Nonfiction-Companion-Magic-Tonight/dp/0375813578",
                "https://www.amazon.com/Titanic-Disaster-Turtleback-Library-Binding/dp/0606238115",
                "https://www.amazon.com/You-Wouldnt-Want-Sail-Titanic/dp/0531245055",
            ),
        },
        {
            "type": ActivityType.WATCH,
            "intro": "Many of the documentaries about the Titanic are sensationalist. "
                     "Titanic: The Complete Story parts I & II instead seek to inform, and "
                     "tell the story thoroughly and carefully. They are older but, because of "
                     "that, feature lots of original eye witness testimony from those who "
                     "survived as children and young adults.",
            "resources": _links(
                ResourceType.VIDEO,
                "https://www.youtube.com/watch?v=NC_xDKMKl9w",
                "https://www.youtube.com/watch?v=4Hg9JJgjo08",
            ),
        },
        {
            "type": ActivityType.WATCH,
            "intro": "This documentary tells the story of Robert Ballard as he searches for "
                     "and discovers the Titanic. Also you get to meet Alvin.",
            "resources": _links(
                ResourceType.VIDEO,
                "https://www.youtube.com/watch?v=NrahF3opykM",
                "https://www.youtube.com/watch?v=rg9NnS3c1CQ",
            ),
        },
        {
            "type": ActivityType.DRAW,
            "intro": "Try drawing the ship quickly three times, then develop one of your "
                     "drawings into a more detailed drawing. Some things to think about as "
                     "you start to draw: where was the ship in its journey in this drawing? "
                     "What does the environment around the ship look like (city & "
                     "construction, picking up passengers, open sea, iceberg, bottom of the "
                     "ocean)? Pay attention to details of the ship from photographs you can "
                     "find online - how many smokestacks does it have? Are there cables or "
                     "wires? Is your drawing of the outside or can you see the inside as well?",
        },
        {
            "type": ActivityType.WRITE,
            "intro": "Describe why the people who built it thought it couldn't sink. What "
                     "engineering features did it have that were meant to prevent this from "
                     "happening? Why were they wrong? What decisions could you have made "
                     "differently?",
        },
        {
            "type": ActivityType.WRITE,
            "intro": "Describe the journey taken by Alvin. What can Alvin do? What features "
                     "allow Alvin to do what it can do?",
        },
        {
            "type": ActivityType.CUSTOM,
            "title": "Plot",
            "intro": "41.726931° N and -49.948253° W\n\n"
                     "This is where the Titanic is. Plot this on a map. If you're unfamiliar "
                     "with latitude & longitude learn about that first. Then plot origin & "
                     "destination.",
            "location": {"name": "Wreck of the Titanic", "lat": "41.726931", "lon": "-49.948253"},
        },
        {
            "type": ActivityType.CUSTOM,
            "title": "Go find out",
            "intro": "How did the Titanic communicate with other ships?",
        },
    ],
}

MAGNUS: Dict[str, Any] = {
    "details": {
        "goal": "learn about tower sails, planes without wings & the magnus effect",
        "benefits": "Which is great, because both tower sails and wingless aircraft use "
                    "interesting physics and container ships with tower sails reduce "
                    "reliance on diesel.",
    },
    "criteria": [_age(12, 99)] + _interests(
        "engineering", "sailing", "flight", "aeronautics", "physics", "math",
        "magnus", "magnus effect"),
    "activities": [
        {
            "type": ActivityType.WATCH,
            "intro": "First, let's pique our interests. Why on earth does the following happen?",
            "resources": _links(ResourceType.VIDEO, "https://www.youtube.com/watch?v=QtP_bh2lMXc"),
        },
        {
            "type": ActivityType.WATCH,
            "intro": "These two videos give a cursory explanation.",
            "resources": _links(
                ResourceType.VIDEO,
                "https://www.youtube.com/watch?v=2OSrvzNW9FE",
                "https://www.youtube.com/watch?v=23f1jvGUWJs",
            ),
        },
        {
            "type": ActivityType.WATCH,
            "intro": "There are surprising industrial applications of the magnus effect: "
                     "sails for container ships.",
            "resources": _links(ResourceType.VIDEO, "https://youtu.be/aQXp75Qt99M?t=1m9s"),
        },
        {
            "type": ActivityType.READ,
            "intro": "Articles about industrial applications of the magnus effect",
            "resources": _links(
                ResourceType.BOOK,
                "https://www.mpropulsion.com/news/view,finns-harness-sail-power-on-maersk-tanker_54046.htm",
                "https://www.theguardian.com/environment/2017/mar/14/spinning-sail-reboot-cut-fuel-make-ocean-tankers-greener",
            ),
        },
        {
            "type": ActivityType.READ,
            "intro": "Now that you're hopefully sufficiently convinced of its intrigue and "
                     "utility... read the wikipedia page on the magnus effect & flettner rotor.",
            "resources": _links(
                ResourceType.PAGE,
                "https://en.wikipedia.org/wiki/Magnus_effect",
                "https://en.wikipedia.org/wiki/Flettner_rotor",
            ),
        },
        {
            "type": ActivityType.CUSTOM,
            "title": "Explore",
            "intro": "In the videos above, you heard mention of Newton's third law - the object "
                     "acts on the air and the air acts back on the object, causing it to move "
                     "in a direction. Explore its implications here:",
            "resources": _links(
                ResourceType.PAGE,
                "https://www.physicsclassroom.com/class/newtlaws/Lesson-4/Newton-s-Third-Law",
            ),
        },
        {
            "type": ActivityType.CUSTOM,
            "title": "Solve",
            "intro": "Here's an MIT open courseware unit that describes the math behind the "
                     "magnus effect. Also included is the context this particular exercise is "
                     "drawn from, if you want to do the background work as well.",
            "resources": _links(
                ResourceType.PAGE,
                "https://ocw.mit.edu/courses/mechanical-engineering/2-25-advanced-fluid-mechanics-fall-2013/potential-flow-theory/MIT2_25F13_SolutionMagnus.pdf",
                "https://ocw.mit.edu/courses/mechanical-engineering/2-25-advanced-fluid-mechanics-fall-2013/potential-flow-theory/",
            ),
        },
        {
            "type": ActivityType.WATCH,
            "intro": "A wonderful little model aircraft powered by this effect.",
            "resources": _links(ResourceType.VIDEO, "https://www.youtube.com/watch?v=GAqLyyg2AHk"),
        },
        {
            "type": ActivityType.READ,
            "intro": "There is also intrigue regarding the magnus effect in cricket.",
            "resources": _links(
                ResourceType.PAGE,
                "http://web.archive.org/web/20071018203238/http://www.geocities.com/k_achutarao/MAGNUS/magnus.html",
            ),
        },
        {
            "type": ActivityType.READ,
            "intro": "A discussion of the Magnus effect & lift, focused on equations.",
            "resources": _links(ResourceType.PAGE, "https://www.mathpages.com/home/kmath258/kmath258.htm"),
        },
    ],
}

FIXTURES = [TITANIC, MAGNUS]


def seed_fixtures(resolver: UnitResolver) -> List[Unit]:
    """Create the fixture units (with fresh ids) through ``resolver``."""
    units = []
    for fixture in FIXTURES:
        details = Details.model_validate(fixture["details"])
        unit = resolver.create_unit(details.goal)
        resolver.update_details(unit.id, details)
        resolver.update_criteria(unit.id, [Criterion.model_validate(c) for c in fixture["criteria"]])
        for activity in fixture["activities"]:
            resolver.add_activity(unit.id, ActivityInput.model_validate(activity))
        units.append(resolver.unit(unit.id))
    logger.info(f"Seeded {len(units)} fixture units")
    return units
