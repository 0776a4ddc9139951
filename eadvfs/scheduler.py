# scheduler.py

import logging

from eadvfs.config import SchedulerConfig
from eadvfs.power import FrequencyChoice, default_power_model

logger = logging.getLogger(__name__)


class Process:
    """Represents a single job: fixed arrival and demand plus runtime state."""
    def __init__(self, pid, arrival_time, burst_time):
        self.pid = pid
        self.at = float(arrival_time)  # Arrival Time (ms)
        self.bt = float(burst_time)    # Burst Time (ms of work at 1.0x)

        self.rem_bt = self.bt
        self.st = None  # First dispatch
        self.ct = None  # Completion Time

    def reset(self):
        self.rem_bt = self.bt
        self.st = None
        self.ct = None

    def is_ready(self, at_time, epsilon):
        return self.at <= at_time and self.rem_bt > epsilon

    def is_complete(self, epsilon):
        return self.rem_bt <= epsilon

    def apply_work(self, amount, now, epsilon):
        """Burn `amount` ms of reference work; stamp completion the first time demand runs out."""
        self.rem_bt = max(0.0, self.rem_bt - amount)
        if self.rem_bt <= epsilon and self.ct is None:
            self.ct = now

    @property
    def tat(self):
        # Turnaround Time (TAT = CT - AT)
        return None if self.ct is None else self.ct - self.at

    @property
    def wt(self):
        # Waiting Time (WT = TAT - BT)
        return None if self.ct is None else self.tat - self.bt

    @property
    def rt(self):
        # Response Time (RT = ST - AT)
        return None if self.st is None else self.st - self.at

    def to_dict(self):
        """Converts object to dictionary for JSON transfer."""
        return {
            'pid': self.pid,
            'at': self.at,
            'bt': self.bt,
            'st': self.st,
            'ct': self.ct,
            'tat': self.tat,
            'wt': self.wt,
            'rt': self.rt,
        }

    def __repr__(self):
        return f"Process(pid={self.pid}, at={self.at}, bt={self.bt}, rem_bt={self.rem_bt})"


# --- SCHEDULING POLICY ---

def select_frequency(ready, config):
    """Pick a frequency for the next slice from the shape of the ready queue.

    Many short jobs or a predicted overload over the lookahead window race
    at the highest level; long jobs on a quiet queue crawl at the lowest;
    everything else runs at the middle level.
    """
    if not ready:
        return None

    sum_rem = sum(p.rem_bt for p in ready)
    short_count = sum(1 for p in ready if p.rem_bt <= config.short_threshold)
    avg_rem = sum_rem / len(ready)
    short_frac = short_count / len(ready)
    util_pred = min(1.0, sum_rem / max(1.0, config.lookahead_ms))

    if short_frac > config.short_fraction_threshold or util_pred > config.util_threshold:
        return FrequencyChoice.HIGH
    elif avg_rem > config.long_job_threshold:
        return FrequencyChoice.LOW
    else:
        return FrequencyChoice.MEDIUM


def fixed_frequency(choice):
    """A frequency policy pinned to one level, for static-frequency baselines."""
    def select_fixed(ready, config):
        return choice if ready else None
    select_fixed.__name__ = f"fixed_{choice.value}"
    return select_fixed


def select_process(ready):
    """SRTF: smallest remaining demand wins, first-encountered on ties."""
    if not ready:
        return None
    best = ready[0]
    for p in ready[1:]:
        if p.rem_bt < best.rem_bt:
            best = p
    return best


# --- SIMULATION ENGINE ---

def next_event_time(run, process, level, next_arrival):
    """End of the slice: completion at `level`, the next arrival, or the quantum cap."""
    run_until = run.clock + process.rem_bt / level.speed
    if next_arrival is not None and next_arrival < run_until:
        run_until = next_arrival
    return min(run_until, run.clock + run.config.quantum_ms)


class SimulationRun:
    """State of one simulation: clock, energy, busy time and the Gantt timeline."""

    def __init__(self, processes, power_model=None, config=None, frequency_policy=select_frequency):
        self.processes = list(processes)
        self.power_model = power_model or default_power_model()
        self.config = config or SchedulerConfig()
        self.frequency_policy = frequency_policy
        self.reset()

    def reset(self):
        for p in self.processes:
            p.reset()
        self.clock = 0.0        # ms
        self.energy = 0.0       # Joules, idle included
        self.idle_energy = 0.0  # Joules
        self.busy_time = 0.0    # ms
        self.gantt_timeline = []
        self.energy_log = []
        self.stopped_by_horizon = False
        self.stalled = False

    def all_done(self):
        return all(p.is_complete(self.config.epsilon) for p in self.processes)

    def unfinished_count(self):
        return sum(1 for p in self.processes if not p.is_complete(self.config.epsilon))

    def ready_set(self):
        """Ready processes in input order, plus the earliest arrival after the clock."""
        ready = []
        next_arrival = None
        for p in self.processes:
            if p.is_ready(self.clock, self.config.epsilon):
                ready.append(p)
            if p.at > self.clock and (next_arrival is None or p.at < next_arrival):
                next_arrival = p.at
        return ready, next_arrival

    def run(self):
        self.reset()
        logger.info("Starting simulation of %d process(es)", len(self.processes))
        horizon = self.config.horizon_ms

        while not self.all_done():
            if horizon is not None and self.clock > horizon:
                self.stopped_by_horizon = True
                logger.warning("Stopped at t=%.3f ms (horizon %.3f ms) with %d process(es) unfinished",
                               self.clock, horizon,
                               self.unfinished_count())
                break

            ready, next_arrival = self.ready_set()
            if not ready:
                if next_arrival is None:
                    # Unfinished work that will never become ready
                    self.stalled = True
                    logger.warning("Stalled at t=%.3f ms with %d process(es) that can never run",
                                   self.clock, self.unfinished_count())
                    break
                self._idle_until(next_arrival)
                continue

            choice = self.frequency_policy(ready, self.config) or FrequencyChoice.LOW
            level = self.power_model.level_for(choice)
            process = select_process(ready)

            run_until = next_event_time(self, process, level, next_arrival)
            if run_until - self.clock <= 0:
                # Remaining work too small to move the clock: close the job out in place
                self.clock = max(self.clock, run_until)
                if process.st is None:
                    process.st = self.clock
                process.apply_work(process.rem_bt, self.clock, self.config.epsilon)
                continue
            self._execute(process, level, run_until - self.clock)

        logger.info("Simulation finished at t=%.3f ms: energy=%.6f J, busy=%.3f ms",
                    self.clock, self.energy, self.busy_time)
        return self

    def _idle_until(self, until):
        idle_for = until - self.clock
        idle_joules = self.power_model.idle_power * (idle_for / 1000.0)
        self.energy += idle_joules
        self.idle_energy += idle_joules
        self.energy_log.append({'pid': 'Idle', 'label': 'idle', 'start': self.clock,
                                'duration': idle_for, 'power': self.power_model.idle_power})
        logger.debug("t=%.3f idle for %.3f ms", self.clock, idle_for)
        self.clock = until

    def _execute(self, process, level, run_time):
        if process.st is None:
            process.st = self.clock
        logger.debug("t=%.3f run P%s at %s for %.3f ms (rem=%.3f)",
                     self.clock, process.pid, level.label, run_time, process.rem_bt)

        start_time = self.clock
        self.clock += run_time
        process.apply_work(run_time * level.speed, self.clock, self.config.epsilon)
        self.energy += level.power * (run_time / 1000.0)
        self.busy_time += run_time
        self.energy_log.append({'pid': process.pid, 'label': level.label, 'start': start_time,
                                'duration': run_time, 'power': level.power})

        # Merge if the last block was the same process
        if self.gantt_timeline and self.gantt_timeline[-1]['pid'] == process.pid:
            self.gantt_timeline[-1]['end'] = self.clock
        else:
            self.gantt_timeline.append({'pid': process.pid, 'start': start_time, 'end': self.clock})


def make_processes(jobs):
    """Turn (arrival, burst) pairs into Process objects numbered from 1."""
    return [Process(pid, arrival, burst) for pid, (arrival, burst) in enumerate(jobs, start=1)]


def simulate(jobs, power_model=None, config=None, frequency_policy=select_frequency):
    """Run one energy-aware SRTF simulation over (arrival, burst) pairs."""
    return SimulationRun(make_processes(jobs), power_model, config, frequency_policy).run()
