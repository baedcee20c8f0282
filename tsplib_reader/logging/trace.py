import csv
import json


class ParseTrace:
    """Per-section decode log: one row per flushed section."""

    def __init__(self):
        self.rows = []

    def append(self, section, line, entries, elapsed, status="ok"):
        self.rows.append((section, int(line), int(entries), float(elapsed), status))

    @property
    def total_elapsed(self):
        return sum(row[3] for row in self.rows)

    def sections(self):
        return [row[0] for row in self.rows]

    def save_csv(self, path):
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["section", "line", "entries", "elapsed_s", "status"])
            for section, line, entries, elapsed, status in self.rows:
                w.writerow([section, line, entries, elapsed, status])


def save_trace_json(path, trace, problem=None, *, extra=None):
    data = {
        "sections": [
            {
                "section": section,
                "line": line,
                "entries": entries,
                "elapsed_s": elapsed,
                "status": status,
            }
            for section, line, entries, elapsed, status in trace.rows
        ],
        "total_elapsed_s": trace.total_elapsed,
    }
    if problem is not None:
        data.update(
            {
                "name": problem.name,
                "type": problem.kind.value,
                "dimension": problem.dimension,
                "edge_weight_type": (
                    problem.weight_kind.value if problem.weight_kind is not None else None
                ),
            }
        )
    if extra:
        data.update(extra)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
