"""
Tests for the Tracing System.
"""

import json

from hook_deps.core.tracer import TraceEventType, TraceLogger


def test_phase_nesting():
  logger = TraceLogger()

  p1 = logger.start_phase("Parent")
  logger.start_phase("Child")
  logger.end_phase()  # End Child
  logger.end_phase()  # End Parent

  events = logger.export()

  # 4 events: Start P, Start C, End C, End P
  assert len(events) == 4
  assert events[0]["type"] == TraceEventType.PHASE_START
  assert events[1]["parent_id"] == p1
  assert events[2]["type"] == TraceEventType.PHASE_END
  assert events[3]["parent_id"] == p1


def test_end_phase_without_start_is_noop():
  logger = TraceLogger()
  logger.end_phase()
  assert logger.export() == []


def test_call_site_metadata():
  logger = TraceLogger()
  phase = logger.start_phase("Rewrite Engine")
  logger.log_call_site("useMemo", 4, "deps_appended", ["state.foo", "state"])

  event = logger.export()[-1]
  assert event["type"] == TraceEventType.CALL_SITE
  assert event["parent_id"] == phase
  assert event["description"] == "useMemo at line 4: deps_appended"
  assert event["metadata"]["dependencies"] == ["state.foo", "state"]


def test_mutation_and_warning():
  logger = TraceLogger()
  logger.log_mutation("useEffect", "useEffect(f, undefined)", "useEffect(f)")
  logger.log_warning("Invalid JavaScript at line 1, column 1")

  mutation, warning = logger.export()
  assert mutation["metadata"] == {"before": "useEffect(f, undefined)", "after": "useEffect(f)"}
  assert warning["type"] == TraceEventType.ANALYSIS_WARNING


def test_export_is_json_serializable():
  logger = TraceLogger()
  logger.start_phase("Patching", "1 action(s)")
  logger.end_phase()

  payload = json.loads(json.dumps(logger.export()))
  assert payload[0]["type"] == "phase_start"
  assert payload[0]["metadata"]["detail"] == "1 action(s)"
