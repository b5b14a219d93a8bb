"""
Class labels and display palette.

The label order is fixed by the bundled model: index i of the model
output is the confidence for CLASSES[i].
"""

CLASSES: tuple[str, ...] = (
    "Cat",
    "Dog",
    "Horse",
    "Elephant",
    "Butterfly",
    "Chicken",
    "Cow",
    "Spider",
    "Sheep",
    "Peach",
    "Pomegranate",
    "Strawberry",
)

# Bar colors, cycled by class position
BAR_PALETTE: tuple[str, ...] = (
    "#FFA500",  # Orange
    "#FFC0CB",  # Pink
    "#ADD8E6",  # Light blue
    "#0000FF",  # Blue
)

TRACK_COLOR = "#F0F0F0"
