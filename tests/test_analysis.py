"""
Tests for event filtering, ranking and pattern detection.
"""

import pytest
from pydantic import ValidationError

from waftriage.analysis.filters import available_threat_types, build_haystack, filter_events
from waftriage.analysis.labels import action_label, threat_label
from waftriage.analysis.patterns import (
    SUSPICIOUS_PATH_KEYWORDS,
    host_path_key,
    is_blocked,
    is_server_error,
    is_suspicious_path,
    repeated_404_ranking,
)
from waftriage.analysis.ranking import count_where, top_n
from waftriage.models.criteria import FilterCriteria
from waftriage.models.log_event import LogEvent

from factories import make_event


class TestLogEvent:
    """Tests for the LogEvent model."""
    
    def test_parses_wire_format(self):
        event = LogEvent.model_validate({
            "id": "abc",
            "timestamp": "2024-01-15T03:22:15Z",
            "hostname": "shop.example.com",
            "statusCode": 404,
            "threatType": "bot",
            "ruleId": "r-1",
        })
        
        assert event.status_code == 404
        assert event.threat_type == "bot"
        assert event.rule_id == "r-1"
        assert event.path is None

    def test_numeric_id_becomes_text(self):
        event = LogEvent.model_validate({"id": 17, "timestamp": "2024-01-15T03:22:15Z"})
        assert event.id == "17"

    def test_events_are_immutable(self):
        event = make_event()
        with pytest.raises(ValidationError):
            event.path = "/admin"


class TestFilterEvents:
    """Tests for filter_events."""
    
    def setup_method(self):
        self.events = [
            make_event(hostname="a.example.com", path="/login", action="BLOCKED", threat_type="bot", country="NL"),
            make_event(hostname="b.example.com", path="/checkout", action="allowed", status_code=502),
            make_event(hostname="a.example.com", path="/", action="pending", threat_type="Bot"),
            make_event(hostname=None, path=None, status_code=None, action=None, method=None),
            make_event(hostname="c.example.com", path="/api", action="blocked", threat_type="xss", rule_id="XSS-01"),
        ]
    
    def test_no_criteria_is_identity(self):
        result = filter_events(self.events, FilterCriteria())
        assert result == self.events
    
    def test_action_is_case_insensitive_on_event(self):
        result = filter_events(self.events, FilterCriteria(action="BLOCKED"))
        assert [e.id for e in result] == [self.events[0].id, self.events[4].id]
    
    def test_unrecognized_action_matches_neither_button(self):
        """An event with action 'pending' matches neither ALLOWED nor BLOCKED."""
        allowed = filter_events(self.events, FilterCriteria(action="ALLOWED"))
        blocked = filter_events(self.events, FilterCriteria(action="BLOCKED"))
        
        assert self.events[2] not in allowed
        assert self.events[2] not in blocked
        assert self.events[3] not in allowed
    
    def test_threat_type_is_exact_and_case_sensitive(self):
        result = filter_events(self.events, FilterCriteria(threat_type="bot"))
        assert result == [self.events[0]]
    
    def test_text_query_searches_all_fields(self):
        assert filter_events(self.events, FilterCriteria(text_query="NL")) == [self.events[0]]
        assert filter_events(self.events, FilterCriteria(text_query="502")) == [self.events[1]]
        assert filter_events(self.events, FilterCriteria(text_query="xss-01")) == [self.events[4]]
    
    def test_blank_text_query_is_ignored(self):
        result = filter_events(self.events, FilterCriteria(text_query="   "))
        assert result == self.events

    def test_text_query_matches_untrimmed(self):
        """Surrounding spaces in a non-blank query are part of the match."""
        assert filter_events(self.events, FilterCriteria(text_query="login")) == [self.events[0]]
        assert filter_events(self.events, FilterCriteria(text_query=" login")) == []

    def test_criteria_are_conjunctive(self):
        criteria = FilterCriteria(text_query="a.example", action="BLOCKED", threat_type="bot")
        assert filter_events(self.events, criteria) == [self.events[0]]
    
    def test_result_is_subsequence_in_order(self):
        result = filter_events(self.events, FilterCriteria(text_query="example"))
        indexes = [self.events.index(e) for e in result]
        assert indexes == sorted(indexes)
    
    def test_no_match_returns_empty(self):
        assert filter_events(self.events, FilterCriteria(text_query="nothing-here")) == []
        assert filter_events([], FilterCriteria(action="BLOCKED")) == []
    
    def test_haystack_null_fields(self):
        event = make_event(hostname=None, path=None, status_code=None, method=None)
        assert build_haystack(event) == "      "
    
    def test_available_threat_types_first_seen(self):
        assert available_threat_types(self.events) == ["bot", "Bot", "xss"]


class TestTopN:
    """Tests for the frequency aggregator."""
    
    def test_ties_keep_first_seen_order(self):
        items = ["b", "a", "a", "b", "c"]
        ranking = top_n(items, lambda x: x, 5)
        
        assert [(r.value, r.count) for r in ranking] == [("b", 2), ("a", 2), ("c", 1)]
    
    def test_sorted_by_count_descending(self):
        items = ["x", "y", "y", "z", "z", "z"]
        ranking = top_n(items, lambda x: x, 5)
        
        assert [r.value for r in ranking] == ["z", "y", "x"]
        for a, b in zip(ranking, ranking[1:]):
            assert a.count >= b.count
    
    def test_truncates_to_n(self):
        items = ["a", "b", "c", "d", "e", "f", "g"]
        assert len(top_n(items, lambda x: x, 5)) == 5
        assert len(top_n(items, lambda x: x, 0)) == 0
    
    def test_fewer_keys_than_n(self):
        assert len(top_n(["a", "a"], lambda x: x, 5)) == 1
    
    def test_empty_and_blank_keys_skipped(self):
        ranking = top_n(["", "  ", "a", ""], lambda x: x, 5)
        assert [(r.value, r.count) for r in ranking] == [("a", 1)]
    
    def test_key_function_on_events(self):
        events = [make_event(hostname="h1"), make_event(hostname=None), make_event(hostname="h1")]
        ranking = top_n(events, lambda e: e.hostname or "", 5)
        assert [(r.value, r.count) for r in ranking] == [("h1", 2)]
    
    def test_count_where(self):
        assert count_where([1, 2, 3, 4], lambda x: x % 2 == 0) == 2


class TestSuspiciousPatterns:
    """Tests for suspicious path and scanning detection."""
    
    def test_case_insensitive(self):
        assert is_suspicious_path("/WP-LOGIN.php") is True
        assert is_suspicious_path("/wp-login.php") is True
    
    def test_plain_path_not_suspicious(self):
        assert is_suspicious_path("/products") is False
        assert is_suspicious_path(None) is False
        assert is_suspicious_path("") is False
    
    @pytest.mark.parametrize("path", [
        "/xmlrpc.php", "/administrator", "/user/login", "/phpmyadmin/index.php",
        "/shell.php", "/.env", "/config.php.bak", "/api/auth/token",
    ])
    def test_keywords(self, path):
        assert is_suspicious_path(path) is True
    
    def test_keyword_dictionary_is_fixed(self):
        assert SUSPICIOUS_PATH_KEYWORDS == (
            "wp-login", "xmlrpc", "admin", "login", "phpmyadmin",
            "shell", ".env", "config.php", "/api/auth",
        )
    
    def test_repeated_404_ranking(self):
        events = [make_event(hostname="h.example.com", path="/admin", status_code=404) for _ in range(4)]
        events.append(make_event(hostname="h.example.com", path="/admin", status_code=200))
        events.append(make_event(hostname="h.example.com", path="/missing", status_code=404))
        
        ranking = repeated_404_ranking(events)
        assert [(r.value, r.count) for r in ranking] == [("h.example.com/admin", 4)]
    
    def test_event_predicates(self):
        assert is_blocked(make_event(action="blocked")) is True
        assert is_blocked(make_event(action=None)) is False
        assert is_server_error(make_event(status_code=503)) is True
        assert is_server_error(make_event(status_code=None)) is False
        assert host_path_key(make_event(hostname=None, path="/x")) == "/x"


class TestLabels:
    """Tests for display labels."""
    
    def test_action_label(self):
        assert action_label("blocked") == "BLOCKED"
        assert action_label("ALLOWED") == "ALLOWED"
        assert action_label("pending") == "ALLOWED"
        assert action_label(None) == "ALLOWED"
    
    def test_threat_label(self):
        assert threat_label(None) == "clean"
        assert threat_label("none") == "clean"
        assert threat_label("sql_injection") == "SQLi"
        assert threat_label("other") == "other"
