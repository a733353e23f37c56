import itertools

RACE_ID_COUNTER = itertools.count(1)
