from lazy import range
from combinators import filter, indexed, map, pop_back, pop_front, reverse, slice


def expensive_square(x):
    # Print on every call so laziness is visible
    print(f"  computing f({x}) ...")
    return x * x


print("\n--- Demo: laziness (no work until a cursor is read) ---")
pipeline = range(1, 10_000) | map(expensive_square) | filter(lambda v: v % 2 == 0)
print("Constructed pipeline. No output yet (nothing computed).")
print("\nReading the first element:")
print(f"First: {pipeline.front()}\n")

print("--- Demo: windows over a container ---")
data = [0, 1, 2, 3, 4]
print(f"pop_front(2): {(data | pop_front(2)).to_list()}")
print(f"pop_back(2):  {(data | pop_back(2)).to_list()}")
print(f"slice(2, 3):  {(data | slice(2, 3)).to_list()}")
print(f"slice(-2, -1): {(data | slice(-2, -1)).to_list()}\n")

print("--- Demo: reverse and indexed ---")
for i, v in range(data) | reverse() | indexed():
    print(f"  #{i}: {v}")
print()

print("--- Demo: writing through a borrowed range ---")
scores = [3, 8, 5]
cursor = range(scores).filter(lambda s: s > 4).begin()
cursor.value = 10
print(f"scores after update: {scores}\n")

print("--- Demo: single-pass sources ---")
lines = (line.strip() for line in ["a\n", "bb\n", "ccc\n"])
print(f"lengths: {range(lines).map(len).to_list()}")
