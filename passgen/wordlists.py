from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

import unidecode
from wordfreq import top_n_list

from .errors import PolicyError


# Named, ordered word list; selection is uniform with replacement, so entries must be unique
@dataclass(frozen=True, slots=True)
class WordList:
    key: str
    words: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.words:
            raise ValueError(f"word list {self.key!r} is empty")
        if len(set(self.words)) != len(self.words):
            raise ValueError(f"word list {self.key!r} contains duplicate entries")
        if any(not w or w != w.lower() for w in self.words):
            raise ValueError(f"word list {self.key!r} must contain lowercase words only")

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, index: int) -> str:
        return self.words[index]


def _split(text: str) -> Tuple[str, ...]:
    return tuple(text.split())


COMMON = WordList("common", _split("""
    able acid aged also area army away baby back ball band bank base bath bear beat
    bell belt best bird blow blue boat body bone book boss bowl bread brick bring
    brown build burn busy cake call calm camp card care cart case cash cast cell
    chair chalk charm cheap chef chest chin city clay clean clock cloud coat code
    coin cold cook cool copy corn cost crew crop cube cup dance dark data date
    dawn deal deck deep desk dial diet disk dock door draw dream dress drink drive
    drop drum duck dust duty each earn east easy edge empty enjoy equal event exit
    face fact fair farm fast film find fire fish flag flat floor flow fold food
    fork form frame fresh front fuel fund game gate gift glad glass goal gold good
    grab grain green grid grow half hall hand happy hard harm hat head heat help
    hero high hill hold home hook hope horn host hour huge idea inch iron item
    jazz join joke jump just keep kind king kite knee knot lake lamp land last
    lawn lead leaf left lemon level lift light line link list load loan lock logo
    long loud love luck lunch magic mail main make many mark mask meal meat melt
    menu milk mind mint mode moon more most move much music nail name near neat
    neck nest news next nice night noble noise note novel oven open order paint
    pair palm paper park part path peace pearl pen piano pick pilot pink pipe
    place plan plant plate play plot poem point pond pool port post power press
    price print prize proud pull pump quick quiet radio rail rain range rapid
    reach read real rest rice rich ride ring road rock roof room rope rose round
    royal rule safe salt sand save scale scarf scene school score sea seat seed
    shape share sharp sheet shelf shell shift shine ship shirt shoe shop short
    show side sign silk silver simple sing size skill sleep slow small smile snow
    soap sock soft song sound soup space spark speed spoon sport spring square
    stage stamp star start steam step stone story storm stove straw street
    strong sugar suit summer sun super sweet swim table tail talk tall tape task
    taste team tent test thin tidy tiger time tiny title toast today tone tool
    tooth torch tower town toy track trade train tray treat trend trip truck true
    tune turn twin type uncle union unit upper urban usual valid value van vase
    video view visit vivid voice vote wage walk wall warm wash watch water wave
    wheel white whole wide wind window wing winter wire wise wood word work world
    yard year yellow young youth zero zone
"""))

ANIMALS = WordList("animals", _split("""
    alpaca ant ape badger bat beaver bee beetle bison boar buffalo camel canary
    cat cheetah chicken cobra cougar cow coyote crab crane crow deer dingo dog
    dolphin donkey dove dragonfly eagle eel elk emu falcon ferret finch flamingo
    fox frog gazelle gecko gerbil giraffe goat goose gorilla hamster hare hawk
    hedgehog heron hippo horse hyena ibis iguana impala jackal jaguar jay koala
    lemur leopard lion lizard llama lobster lynx macaw magpie mantis marmot
    meerkat mink mole monkey moose moth mouse mule newt octopus otter owl ox
    panda panther parrot peacock pelican penguin pig pigeon pony possum puffin
    puma python quail rabbit raccoon ram rat raven reindeer rhino robin salmon
    seal shark sheep shrimp skunk sloth snail snake sparrow spider squid squirrel
    stork swan tapir termite toad tortoise toucan trout turkey turtle viper
    vulture walrus wasp weasel whale wolf wombat yak zebra
"""))

NATURE = WordList("nature", _split("""
    acorn alpine amber aspen autumn bamboo bay beach berry birch blossom bloom
    boulder branch breeze brook bush canyon cave cedar cliff clover coast comet
    coral cove creek crystal daisy delta desert dew dune dusk earth ember fern
    field fjord flame flora forest frost galaxy garden geyser glacier glade
    glen grass grove gully harbor hazel heath hollow horizon ice island ivy
    jungle lagoon lake lava leaf lichen lily lotus maple marsh meadow mesa mist
    moss mountain oak oasis ocean orchid pebble petal pine plain planet pollen
    prairie rain rainbow reef ridge river rock root sage sand savanna sequoia
    shore sky slope snow soil spring spruce stone storm stream summit sun
    sunrise sunset swamp thicket thorn thunder tide timber trail tree tulip
    tundra valley vine violet volcano water wave willow wind woods
"""))

WORD_LISTS: Dict[str, WordList] = {wl.key: wl for wl in (COMMON, ANIMALS, NATURE)}

_FREQ_PREFIX = "freq:"
_WORDLIST_CACHE: Dict[str, WordList] = {}  # Cached frequency lists


# Most frequent words of a language, transliterated to ASCII
def frequency_list(lang: str, n: int = 5000) -> WordList:
    cache_key = f"{lang}:{n}"
    if cache_key in _WORDLIST_CACHE:
        return _WORDLIST_CACHE[cache_key]
    words: List[str] = []
    seen = set()
    try:
        ranked = top_n_list(lang, n)
    except LookupError as exc:
        raise PolicyError(f"No word list for language {lang!r}") from exc
    for raw in ranked:
        word = unidecode.unidecode(raw).lower()
        # Transliteration can fold distinct words together
        if word.isascii() and word.isalpha() and word not in seen:
            seen.add(word)
            words.append(word)
    if not words:
        raise PolicyError(f"No usable words for language {lang!r}")
    word_list = WordList(f"{_FREQ_PREFIX}{lang}", tuple(words))
    _WORDLIST_CACHE[cache_key] = word_list
    return word_list


# Resolve a word list key: a built-in name or "freq:<lang>"
def get_word_list(key: str) -> WordList:
    if key in WORD_LISTS:
        return WORD_LISTS[key]
    if key.startswith(_FREQ_PREFIX) and len(key) > len(_FREQ_PREFIX):
        return frequency_list(key[len(_FREQ_PREFIX):])
    raise PolicyError(f"Unknown word list: {key!r}")
