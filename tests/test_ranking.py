"""
Tests for the priority ranking service.

Covers the weight store round-trip, batch ranking, single-idea lookups,
query counts and error propagation.
"""

import pytest
import requests
from unittest.mock import Mock

from idea_priority.config import DEFAULT_PRIORITY_WEIGHT
from idea_priority.models.idea import IdeaStatus
from idea_priority.ranking.service import PriorityService
from idea_priority.storage.memory import (
    InMemoryIdeaRepository,
    InMemorySignalRepository,
    InMemoryWeightRepository,
)
from tests.conftest import CREATOR_ID, OTHER_CREATOR_ID, NOW, make_idea, make_signal


# =============================================================================
# Priority Weight
# =============================================================================

class TestPriorityWeight:
    """Tests for get/set_priority_weight."""

    def test_default_weight(self, service):
        assert service.get_priority_weight(CREATOR_ID) == DEFAULT_PRIORITY_WEIGHT == 55

    def test_null_weight_reads_default(self, idea_repo, signal_repo):
        service = PriorityService(idea_repo, InMemoryWeightRepository({CREATOR_ID: None}), signal_repo)
        assert service.get_priority_weight(CREATOR_ID) == 55

    def test_stored_weight_returned(self, service):
        service.set_priority_weight(CREATOR_ID, 60)
        assert service.get_priority_weight(CREATOR_ID) == 60

    @pytest.mark.parametrize("raw, stored", [(-50, 30), (1000, 70), (45, 45), (30, 30), (70, 70)])
    def test_set_weight_clamps(self, service, weight_repo, raw, stored):
        service.set_priority_weight(CREATOR_ID, raw)
        assert weight_repo.get_weight(CREATOR_ID) == stored

    def test_out_of_range_stored_value_clamped_on_read(self, idea_repo, signal_repo):
        service = PriorityService(idea_repo, InMemoryWeightRepository({CREATOR_ID: 95}), signal_repo)
        assert service.get_priority_weight(CREATOR_ID) == 70


# =============================================================================
# Batch Ranking
# =============================================================================

class TestGetRankedIdeas:
    """Tests for get_ranked_ideas."""

    def test_no_ideas_returns_empty_without_other_queries(self, service, idea_repo, weight_repo, signal_repo):
        """
        GIVEN: A creator with no approved ideas
        WHEN: Ideas are ranked
        THEN: An empty list is returned and no weight/signal query is made
        """
        assert service.get_ranked_ideas(CREATOR_ID) == []
        assert idea_repo.calls["list_ideas"] == 1
        assert sum(weight_repo.calls.values()) == 0
        assert sum(signal_repo.calls.values()) == 0

    def test_scenario_votes_only(self, service, idea_repo):
        """
        GIVEN: Two ideas with 10 and 5 votes, no signals, default weight
        WHEN: Ideas are ranked
        THEN: Priority equals vote score (100, 50) in that order
        """
        idea_repo.add(make_idea(1, 5), make_idea(2, 10))

        results = service.get_ranked_ideas(CREATOR_ID)

        assert [r.idea.id for r in results] == [2, 1]
        assert [r.priority.vote_score for r in results] == [100, 50]
        assert [r.priority.priority_score for r in results] == [100, 50]
        assert all(r.signal is None for r in results)
        assert not any(r.priority.has_external_signal for r in results)

    def test_scenario_fresh_signal_blend(self, service, idea_repo, signal_repo):
        """
        GIVEN: Idea with 15 of max 20 votes and a fresh opportunity score of 65
        WHEN: Ideas are ranked with weight 55
        THEN: Its priority is round(0.55 * 75 + 0.45 * 65) = 71
        """
        idea_repo.add(make_idea(1, 20), make_idea(2, 15))
        signal_repo.add(make_signal(2, 65, hours_old=3))

        results = {r.idea.id: r for r in service.get_ranked_ideas(CREATOR_ID)}

        priority = results[2].priority
        assert priority.vote_score == 75
        assert priority.effective_opportunity_score == 65
        assert priority.priority_score == 71
        assert priority.has_external_signal is True
        assert priority.is_stale is False
        assert results[2].signal.opportunity_score == 65

    def test_scenario_all_zero_votes(self, service, idea_repo):
        """
        GIVEN: A creator whose ideas all have zero votes
        WHEN: Ideas are ranked
        THEN: Every vote score is 0 and no division error occurs
        """
        idea_repo.add(make_idea(1, 0), make_idea(2, 0), make_idea(3, 0))

        results = service.get_ranked_ideas(CREATOR_ID)

        assert len(results) == 3
        assert all(r.priority.vote_score == 0 for r in results)

    def test_stale_signal_decayed(self, service, idea_repo, signal_repo):
        idea_repo.add(make_idea(1, 10))
        signal_repo.add(make_signal(1, 75, hours_old=25))

        [result] = service.get_ranked_ideas(CREATOR_ID)

        assert result.priority.is_stale is True
        assert result.priority.opportunity_score == 75
        assert result.priority.effective_opportunity_score == 60

    def test_sorted_descending(self, service, idea_repo, signal_repo, weight_repo):
        weight_repo.set_weight(CREATOR_ID, 30)
        idea_repo.add(
            make_idea(1, 50), make_idea(2, 40), make_idea(3, 10),
            make_idea(4, 5), make_idea(5, 25),
        )
        signal_repo.add(
            make_signal(3, 100), make_signal(4, 95, hours_old=30), make_signal(1, 0),
        )

        scores = [r.priority.priority_score for r in service.get_ranked_ideas(CREATOR_ID)]

        assert all(scores[i] >= scores[i + 1] for i in range(len(scores) - 1))

    def test_opportunity_can_outrank_votes(self, service, idea_repo, signal_repo, weight_repo):
        """With votes weighted at 30%, a strong signal lifts a less-voted idea."""
        weight_repo.set_weight(CREATOR_ID, 30)
        idea_repo.add(make_idea(1, 10), make_idea(2, 6))
        signal_repo.add(make_signal(1, 10), make_signal(2, 100))

        results = service.get_ranked_ideas(CREATOR_ID)

        # idea 1: round(0.3*100 + 0.7*10) = 37; idea 2: round(0.3*60 + 0.7*100) = 88
        assert [r.idea.id for r in results] == [2, 1]
        assert [r.priority.priority_score for r in results] == [88, 37]

    def test_ties_keep_store_order(self, service, idea_repo, signal_repo):
        """Equal priorities stay in votes-descending store order."""
        # idea 1: round(0.55 * 50 + 0.45 * 100) = 73; ideas 2 and 3 tie at 100
        idea_repo.add(make_idea(1, 5), make_idea(2, 10), make_idea(3, 10))
        signal_repo.add(make_signal(1, 100))

        results = service.get_ranked_ideas(CREATOR_ID)

        assert [r.idea.id for r in results] == [2, 3, 1]
        assert [r.priority.priority_score for r in results] == [100, 100, 73]

    def test_status_filter(self, service, idea_repo):
        idea_repo.add(
            make_idea(1, 40),
            make_idea(2, 10, status=IdeaStatus.COMPLETED),
            make_idea(3, 5, status=IdeaStatus.COMPLETED),
        )

        results = service.get_ranked_ideas(CREATOR_ID, IdeaStatus.COMPLETED)

        assert [r.idea.id for r in results] == [2, 3]
        # normalized within the completed set, not against the approved idea
        assert results[0].priority.vote_score == 100

    def test_other_creators_excluded(self, service, idea_repo):
        idea_repo.add(make_idea(1, 3), make_idea(2, 100, creator_id=OTHER_CREATOR_ID))

        results = service.get_ranked_ideas(CREATOR_ID)

        assert [r.idea.id for r in results] == [1]
        assert results[0].priority.vote_score == 100

    def test_single_query_per_store(self, service, idea_repo, weight_repo, signal_repo):
        """Weight and signals are fetched once per call, not once per idea."""
        idea_repo.add(*[make_idea(i, i) for i in range(1, 21)])
        signal_repo.add(*[make_signal(i, 50) for i in range(1, 21, 2)])

        service.get_ranked_ideas(CREATOR_ID)

        assert idea_repo.calls["list_ideas"] == 1
        assert weight_repo.calls["get_weight"] == 1
        assert signal_repo.calls["get_signals"] == 1
        assert signal_repo.calls["get_signal"] == 0

    def test_signals_requested_for_fetched_ids_only(self, idea_repo, weight_repo):
        signals = Mock()
        signals.get_signals.return_value = {}
        service = PriorityService(idea_repo, weight_repo, signals, clock=lambda: NOW)
        idea_repo.add(make_idea(1, 1), make_idea(2, 2), make_idea(3, 3, creator_id=OTHER_CREATOR_ID))

        service.get_ranked_ideas(CREATOR_ID)

        signals.get_signals.assert_called_once_with({1, 2})

    def test_store_failure_propagates(self, weight_repo, signal_repo):
        ideas = Mock()
        ideas.list_ideas.side_effect = requests.ConnectionError("store down")
        service = PriorityService(ideas, weight_repo, signal_repo)

        with pytest.raises(requests.ConnectionError):
            service.get_ranked_ideas(CREATOR_ID)


# =============================================================================
# Single-idea Lookup
# =============================================================================

class TestGetPriorityForIdea:
    """Tests for get_priority_for_idea."""

    def test_unknown_idea_returns_none(self, service):
        assert service.get_priority_for_idea(404, CREATOR_ID) is None

    def test_wrong_creator_returns_none(self, service, idea_repo, signal_repo):
        idea_repo.add(make_idea(1, 10))
        signal_repo.add(make_signal(1, 80))

        assert service.get_priority_for_idea(1, OTHER_CREATOR_ID) is None

    def test_matches_batch_result(self, service, idea_repo, signal_repo, weight_repo):
        weight_repo.set_weight(CREATOR_ID, 40)
        idea_repo.add(make_idea(1, 20), make_idea(2, 15), make_idea(3, 3))
        signal_repo.add(make_signal(2, 65), make_signal(3, 90, hours_old=48))

        batch = {r.idea.id: r.priority for r in service.get_ranked_ideas(CREATOR_ID)}

        for idea_id in (1, 2, 3):
            assert service.get_priority_for_idea(idea_id, CREATOR_ID) == batch[idea_id]

    def test_fresh_signal_scenario(self, service, idea_repo, signal_repo):
        idea_repo.add(make_idea(1, 20), make_idea(2, 15))
        signal_repo.add(make_signal(2, 65, hours_old=12))

        priority = service.get_priority_for_idea(2, CREATOR_ID)

        assert priority.idea_id == 2
        assert priority.vote_score == 75
        assert priority.is_stale is False
        assert priority.effective_opportunity_score == 65
        assert priority.priority_score == 71

    def test_completed_idea_normalized_against_approved(self, service, idea_repo):
        """
        GIVEN: A completed idea with 5 votes and approved ideas peaking at 10
        WHEN: Its priority is looked up
        THEN: Its vote score is relative to the approved set (50)
        """
        idea_repo.add(
            make_idea(1, 10),
            make_idea(2, 5, status=IdeaStatus.COMPLETED),
            make_idea(3, 6, status=IdeaStatus.COMPLETED),
        )

        priority = service.get_priority_for_idea(2, CREATOR_ID)

        assert priority.vote_score == 50

    def test_no_approved_siblings(self, service, idea_repo):
        """Without approved ideas the baseline is floored at 1 and capped at 100."""
        idea_repo.add(make_idea(1, 8, status=IdeaStatus.COMPLETED))

        priority = service.get_priority_for_idea(1, CREATOR_ID)

        assert priority.vote_score == 100

    def test_uses_single_signal_lookup(self, service, idea_repo, signal_repo, weight_repo):
        idea_repo.add(make_idea(1, 4))

        service.get_priority_for_idea(1, CREATOR_ID)

        assert signal_repo.calls["get_signal"] == 1
        assert signal_repo.calls["get_signals"] == 0
        assert weight_repo.calls["get_weight"] == 1

    def test_not_found_issues_no_other_queries(self, service, idea_repo, weight_repo, signal_repo):
        service.get_priority_for_idea(1, CREATOR_ID)

        assert idea_repo.calls["list_ideas"] == 0
        assert sum(weight_repo.calls.values()) == 0
        assert sum(signal_repo.calls.values()) == 0
