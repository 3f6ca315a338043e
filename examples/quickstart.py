"""orbwatch Quickstart — generate bodies, propagate them and look for collisions."""

from orbwatch import (
    CollisionMonitor,
    PositionTracker,
    category_counts,
    event_midpoint,
    generate_bodies,
    parse_catalog,
)

# A couple of catalog records, as returned by the NASA comet feed
records = [
    {"object": "P/2004 R1 (McNaught)", "e": "0.682", "i_deg": "4.894",
     "q_au_1": "0.986", "q_au_2": "5.23", "p_yr": "5.48"},
    {"object": "C/2012 S1", "e": "0.45", "i_deg": "62.4",
     "q_au_1": "2.1", "q_au_2": "5.6", "p_yr": "8.1"},
]

bodies = parse_catalog(records, seed=1) + generate_bodies(70, seed=1)

print("Bodies per category:")
for category, count in category_counts(bodies).items():
    print(f"  {category.value:<10} {count}")

tracker = PositionTracker()
monitor = CollisionMonitor()

# Stand-in for a render loop: 60 ticks per simulated time unit
for tick in range(600):
    t = tick / 60
    positions = tracker.update(bodies, t)
    monitor.check(bodies, positions, t)

print(f"\nAlerts at t={t:.2f}:")
for event in monitor.alerts:
    when = "now" if event.time_to_collision is None else f"in {event.time_to_collision:.1f}"
    print(f"  {event.body1.name} / {event.body2.name}: distance {event.distance:.4f} ({when})")
    marker = event_midpoint(event, positions)
    if marker is not None and not event.is_predicted:
        print(f"    marker at {marker.round(3)}")
