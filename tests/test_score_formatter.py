from scoring.types import CollectiveClass
from utils.score_formatter import get_collective_status


def test_collective_status():
    assert get_collective_status(CollectiveClass.DECIDED) == "🔴 Decided"
    assert get_collective_status("collective-split") == "🟠 Split"
    assert get_collective_status(CollectiveClass.DECLINED) == "🟢 Declined"
