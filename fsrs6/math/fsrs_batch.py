from __future__ import annotations

from typing import TYPE_CHECKING

import torch

from fsrs6.fsrs_defaults import D_MAX, D_MIN, S_MAX, S_MIN

if TYPE_CHECKING:
    from fsrs6.algorithm import Algorithm


def fsrs6_forgetting_curve(
    decay: torch.Tensor,
    factor: torch.Tensor,
    t: torch.Tensor,
    s: torch.Tensor,
) -> torch.Tensor:
    return torch.pow(1.0 + factor * t / torch.clamp(s, min=S_MIN), decay)


def fsrs6_init_state(
    weights: torch.Tensor, rating: torch.Tensor
) -> tuple[torch.Tensor, torch.Tensor]:
    rating_f = rating.to(dtype=weights.dtype)
    idx = torch.clamp(rating - 1, min=0, max=3)
    s = torch.clamp(weights[idx], min=S_MIN)
    d = weights[4] - torch.exp(weights[5] * (rating_f - 1.0)) + 1.0
    return s, torch.clamp(d, D_MIN, D_MAX)


def fsrs6_next_d(
    weights: torch.Tensor, d: torch.Tensor, rating: torch.Tensor
) -> torch.Tensor:
    rating_f = rating.to(dtype=weights.dtype)
    init_d_easy = weights[4] - torch.exp(weights[5] * 3.0) + 1.0
    delta_d = -weights[6] * (rating_f - 3.0)
    new_d = d + delta_d * (10.0 - d) / 9.0
    new_d = weights[7] * init_d_easy + (1.0 - weights[7]) * new_d
    return torch.clamp(new_d, D_MIN, D_MAX)


def fsrs6_stability_short_term(
    weights: torch.Tensor, s: torch.Tensor, rating: torch.Tensor
) -> torch.Tensor:
    rating_f = rating.to(dtype=weights.dtype)
    sinc = torch.exp(weights[17] * (rating_f - 3.0 + weights[18])) * torch.pow(
        s, -weights[19]
    )
    sinc = torch.where(rating >= 2, torch.clamp(sinc, min=1.0), sinc)
    return torch.clamp(s * sinc, S_MIN, S_MAX)


def fsrs6_stability_after_success(
    weights: torch.Tensor,
    s: torch.Tensor,
    r: torch.Tensor,
    d: torch.Tensor,
    rating: torch.Tensor,
) -> torch.Tensor:
    one = torch.ones_like(s)
    hard_penalty = torch.where(rating == 2, weights[15] * one, one)
    easy_bonus = torch.where(rating == 4, weights[16] * one, one)
    inc = (
        torch.exp(weights[8])
        * (11.0 - d)
        * torch.pow(s, -weights[9])
        * (torch.exp((1.0 - r) * weights[10]) - 1.0)
    )
    return torch.clamp(s * (1.0 + inc * hard_penalty * easy_bonus), S_MIN, S_MAX)


def fsrs6_stability_after_failure(
    weights: torch.Tensor, s: torch.Tensor, r: torch.Tensor, d: torch.Tensor
) -> torch.Tensor:
    new_s = (
        weights[11]
        * torch.pow(d, -weights[12])
        * (torch.pow(s + 1.0, weights[13]) - 1.0)
        * torch.exp((1.0 - r) * weights[14])
    )
    return torch.clamp(new_s, S_MIN, S_MAX)


class FSRS6BatchOps:
    """
    Evaluate the memory model of an `Algorithm` over whole tensors of cards.

    Rows are independent; `difficulty`, `stability`, `elapsed` and `rating`
    must broadcast together. Results track the scalar model up to its 8-decimal
    rounding. No fuzz, learning steps or dates are involved.
    """

    def __init__(
        self,
        algorithm: "Algorithm",
        *,
        device: "torch.device | str" = "cpu",
        dtype: torch.dtype = torch.float64,
    ) -> None:
        params = algorithm.parameters
        self.device = torch.device(device)
        self.dtype = dtype
        self.enable_short_term = params.enable_short_term
        self.maximum_interval = params.maximum_interval
        self._weights = torch.tensor(params.w, device=self.device, dtype=dtype)
        self._decay = -self._weights[20]
        self._factor = torch.pow(
            torch.tensor(0.9, device=self.device, dtype=dtype), 1.0 / self._decay
        ) - 1.0
        self._interval_modifier = algorithm.interval_modifier

    def _as_tensor(self, value) -> torch.Tensor:
        return torch.as_tensor(value, device=self.device, dtype=self.dtype)

    def retrievability(self, elapsed, stability) -> torch.Tensor:
        return fsrs6_forgetting_curve(
            self._decay,
            self._factor,
            self._as_tensor(elapsed),
            self._as_tensor(stability),
        )

    def next_state(
        self, difficulty, stability, elapsed, rating
    ) -> tuple[torch.Tensor, torch.Tensor]:
        """Return (difficulty, stability) after one review per row."""
        d, s, t, grades = torch.broadcast_tensors(
            self._as_tensor(difficulty),
            self._as_tensor(stability),
            self._as_tensor(elapsed),
            self._as_tensor(rating),
        )
        rating = torch.round(grades).to(torch.long)
        w = self._weights

        safe_s = torch.clamp(s, min=S_MIN)
        safe_d = torch.clamp(d, min=D_MIN)
        r = fsrs6_forgetting_curve(self._decay, self._factor, t, safe_s)
        success = fsrs6_stability_after_success(w, safe_s, r, safe_d, rating)
        failure = fsrs6_stability_after_failure(w, safe_s, r, safe_d)
        if self.enable_short_term:
            floor = safe_s / torch.exp(w[17] * w[18])
        else:
            floor = safe_s
        again = torch.minimum(torch.clamp(floor, min=S_MIN), failure)

        new_s = torch.where(rating == 1, again, success)
        if self.enable_short_term:
            short = fsrs6_stability_short_term(w, safe_s, rating)
            new_s = torch.where(t == 0, short, new_s)
        new_d = fsrs6_next_d(w, safe_d, rating)

        init_s, init_d = fsrs6_init_state(w, rating)
        fresh = (d == 0) & (s == 0)
        manual = rating == 0
        new_s = torch.where(fresh, init_s, new_s)
        new_d = torch.where(fresh, init_d, new_d)
        new_s = torch.where(manual, s, new_s)
        new_d = torch.where(manual, d, new_d)
        return new_d, new_s

    def next_interval(self, stability) -> torch.Tensor:
        s = self._as_tensor(stability)
        interval = torch.floor(s * self._interval_modifier + 0.5)
        return torch.clamp(interval, 1, self.maximum_interval).to(torch.long)


__all__ = [
    "FSRS6BatchOps",
    "fsrs6_forgetting_curve",
    "fsrs6_init_state",
    "fsrs6_next_d",
    "fsrs6_stability_short_term",
    "fsrs6_stability_after_success",
    "fsrs6_stability_after_failure",
]
