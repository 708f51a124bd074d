"""
CLI Adapter - Command-line interface.

Thin wrapper over the cosmology, synthesis and realtime modules.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="soniverse",
        description="Spectral sonification in an expanding soniverse",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # distance command
    distance_parser = subparsers.add_parser(
        "distance",
        help="Ages and distances at a redshift",
    )
    distance_parser.add_argument("--z", type=float, required=True, help="Redshift (> -1)")
    _add_model_arguments(distance_parser)

    # tone command
    tone_parser = subparsers.add_parser("tone", help="Render a spectrum to a WAV file")
    tone_parser.add_argument(
        "-c", "--component",
        action="append",
        required=True,
        metavar="FREQ:POWER[:PHASE]",
        help="Spectral line (repeatable)",
    )
    tone_parser.add_argument("--z", type=float, default=0.0, help="Redshift to apply")
    tone_parser.add_argument("--length", type=int, default=1024, help="Buffer length in samples")
    tone_parser.add_argument("--duration", type=float, default=2.0, help="Output length in seconds")
    tone_parser.add_argument("--sample-rate", type=int, default=44100, help="Sample rate (Hz)")
    tone_parser.add_argument("--fade", type=float, default=0.4, help="Fade in/out time (s)")
    tone_parser.add_argument("-o", "--output", help="Output WAV path")
    _add_model_arguments(tone_parser)

    # version command
    subparsers.add_parser("version", help="Show version")

    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if parsed.command is None:
        parser.print_help()
        return 0

    if parsed.command == "version":
        from soniverse import __version__
        print(f"soniverse {__version__}")
        return 0

    if parsed.command == "distance":
        return _cmd_distance(parsed)

    if parsed.command == "tone":
        return _cmd_tone(parsed)

    return 1


def _add_model_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--hubble", type=float, default=0.01, help="Hubble constant (1/s)")
    parser.add_argument("--omega-mass", type=float, default=0.26, help="Matter density")
    parser.add_argument("--omega-vac", type=float, default=0.74, help="Vacuum density")
    parser.add_argument("--speed", type=float, default=343.2, help="Speed of sound (m/s)")


def _model_from_args(args: argparse.Namespace):
    from soniverse.cosmology import CosmologyModel

    return CosmologyModel(
        reference_speed=args.speed,
        hubble=args.hubble,
        omega_mass=args.omega_mass,
        omega_vac=args.omega_vac,
    )


def parse_component(text: str) -> tuple[float, float, float]:
    """Parse FREQ:POWER[:PHASE]."""
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Expected FREQ:POWER[:PHASE], got {text!r}")
    freq, power = float(parts[0]), float(parts[1])
    phase = float(parts[2]) if len(parts) == 3 else 0.0
    return freq, power, phase


def _cmd_distance(args: argparse.Namespace) -> int:
    """Handle distance command."""
    from soniverse.cosmology import DistanceCalculator
    from soniverse.errors import SoniverseError

    try:
        model = _model_from_args(args)
        position = DistanceCalculator().calculate(model, args.z)
    except (SoniverseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"z                  = {position.z:g}")
    print(f"Age                = {position.age:.4f} s")
    print(f"Age at z           = {position.z_age:.4f} s")
    print(f"Travel time        = {position.travel_time:.4f} s")
    print(f"Comoving distance  = {position.comoving_distance:.4f} sound-s")
    print(f"  ({model.to_physical_wavelength(position.comoving_distance):.1f} m)")
    print(f"Angular distance   = {position.angular_distance:.4f} sound-s")
    print(f"Volume distance    = {position.volume_distance:.4f} sound-s")
    return 0


def _cmd_tone(args: argparse.Namespace) -> int:
    """Handle tone command."""
    from soniverse.config import Config
    from soniverse.errors import SoniverseError
    from soniverse.realtime import OfflineBackend, VoiceConfig, VoiceManager
    from soniverse.spectrum import RedshiftMapper, Spectrum
    from soniverse.synthesis import AudioRenderer

    try:
        source = Spectrum.from_triples([parse_component(c) for c in args.component])

        spectrum = source
        if args.z != 0.0:
            spectrum = Spectrum()
            position = RedshiftMapper(_model_from_args(args)).shift(source, args.z, spectrum)
            print(f"Redshifted by z={args.z:g} (travel time {position.travel_time:.3f}s)")

        backend = OfflineBackend(sample_rate=args.sample_rate)
        voices = VoiceManager(
            AudioRenderer(),
            backend,
            resolve=lambda _index: spectrum,
            config=VoiceConfig(
                pool_size=2,
                buffer_size=args.length,
                sample_rate=args.sample_rate,
                fade_time=args.fade,
            ),
        )

        voices.start(0)
        backend.advance(max(args.duration - args.fade, 0.0))
        voices.stop()
        backend.advance(args.fade)

        output = Path(args.output) if args.output else Config().output_dir / "tone.wav"
        backend.export(output, args.duration)
    except (SoniverseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Audio saved to: {output}")
    print(f"Duration: {args.duration:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
