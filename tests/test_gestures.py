import pytest
from webcam.gesture_classifier import GestureClassifier, GestureType
from webcam.config import GestureConfig

@pytest.fixture
def classifier():
    config = GestureConfig()
    return GestureClassifier(config)

@pytest.mark.parametrize("name, expected", [
    ("fist", GestureType.FIST),
    ("point", GestureType.POINT),
    ("victory", GestureType.VICTORY),
    ("open_palm", GestureType.OPEN_PALM),
    ("hang_loose", GestureType.HANG_LOOSE),
    ("thumbs_up", GestureType.THUMBS_UP),
    ("thumbs_down", GestureType.THUMBS_DOWN),
    ("pinch", GestureType.PINCH),
])
def test_basic_poses(classifier, make_pose, name, expected):
    assert classifier.classify(make_pose(name)) == expected

@pytest.mark.parametrize("fingers", [
    {},
    {"index": True},
    {"index": True, "middle": True},
    {"index": True, "middle": True, "ring": True, "pinky": True},
    {"pinky": True, "thumb": "out"},
])
def test_pinch_wins_over_other_fingers(classifier, make_hand, fingers):
    hand = make_hand(pinch=True, **fingers)
    assert classifier.classify(hand) == GestureType.PINCH

def test_pinch_at_two_hundredths(classifier, make_pose):
    # Open palm with the thumb tip 0.02 from the index tip
    hand = make_pose("open_palm")
    ix, iy, iz = hand[8]
    hand[4] = (ix + 0.02, iy, iz)
    assert classifier.classify(hand) == GestureType.PINCH

def test_curled_hand_with_curled_thumb_is_fist(classifier, make_hand):
    assert classifier.classify(make_hand(thumb="curled")) == GestureType.FIST

def test_sideways_thumb_on_curled_hand_is_fist(classifier, make_hand):
    # Thumb extended but level with the wrist: neither up nor down
    assert classifier.classify(make_hand(thumb="out")) == GestureType.FIST

def test_victory_needs_spread_fingers(classifier, make_pose):
    hand = make_pose("victory")
    ix, iy, iz = hand[8]
    hand[12] = (ix + 0.01, iy, iz)
    assert classifier.classify(hand) == GestureType.NONE

def test_open_palm_tolerates_one_curled_outer_finger(classifier, make_hand):
    hand = make_hand(index=True, middle=True, ring=False, pinky=True)
    assert classifier.classify(hand) == GestureType.OPEN_PALM

def test_three_fingers_without_index_is_none(classifier, make_hand):
    hand = make_hand(middle=True, ring=True, pinky=True)
    assert classifier.classify(hand) == GestureType.NONE

def test_incomplete_landmarks_fail_closed(classifier, make_pose):
    assert classifier.classify(make_pose("open_palm")[:20]) == GestureType.NONE
    assert classifier.classify([]) == GestureType.NONE
    assert classifier.classify(None) == GestureType.NONE

def test_thresholds_come_from_config(make_pose):
    # Widening the pinch threshold turns a spread victory into a pinch
    loose = GestureClassifier(GestureConfig(pinch_threshold=0.5))
    assert loose.classify(make_pose("victory")) == GestureType.PINCH

def test_two_hands_force_scale(classifier, make_pose):
    left = make_pose("point")
    right = make_pose("open_palm", offset=(0.3, 0.0, 0.0))
    gesture, scale_distance = classifier.classify_hands([left, right])
    assert gesture == GestureType.TWO_HAND_SCALE
    assert scale_distance == pytest.approx(0.3)

def test_scale_distance_ignores_depth(classifier, make_pose):
    left = make_pose("point")
    right = make_pose("point", offset=(0.3, 0.0, 0.4))
    _, scale_distance = classifier.classify_hands([left, right])
    assert scale_distance == pytest.approx(0.3)

def test_single_hand_has_no_scale_distance(classifier, make_pose):
    assert classifier.classify_hands([make_pose("point")]) == (GestureType.POINT, 0.0)

def test_no_hands(classifier):
    assert classifier.classify_hands([]) == (GestureType.NONE, 0.0)
    assert classifier.classify_hands(None) == (GestureType.NONE, 0.0)

def test_short_hand_is_not_counted(classifier, make_pose):
    # A truncated second hand leaves a single usable hand
    hands = [make_pose("victory"), make_pose("point")[:10]]
    assert classifier.classify_hands(hands) == (GestureType.VICTORY, 0.0)

def test_three_hands_classify_first_hand(classifier, make_pose):
    hands = [
        make_pose("victory"),
        make_pose("point", offset=(0.2, 0.0, 0.0)),
        make_pose("fist", offset=(-0.2, 0.0, 0.0)),
    ]
    assert classifier.classify_hands(hands) == (GestureType.VICTORY, 0.0)
