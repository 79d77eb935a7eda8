from __future__ import annotations

import sys
from decimal import Decimal, InvalidOperation
from importlib.resources import files

TEMPLATES = ["pricing.yaml.example", "company.yaml.example"]


def _init_config() -> None:
    """Copy bundled config templates to the user's config/data directories."""
    from logistix.config import get_config_dir, get_data_dir

    config_dir = get_config_dir()
    data_dir = get_data_dir()
    templates = files("logistix") / "templates"

    config_dir.mkdir(parents=True, exist_ok=True)
    data_dir.mkdir(parents=True, exist_ok=True)

    copied = 0
    for rel in TEMPLATES:
        dest = config_dir / rel
        if dest.exists():
            print(f"  existe déjà: {dest}")
            continue
        src = templates / rel
        with src.open("rb") as f:
            dest.write_bytes(f.read())
        print(f"  créé: {dest}")
        copied += 1

    print()
    print(f"Configuration: {config_dir}")
    print(f"Données:       {data_dir}")
    print()
    if copied:
        print("Prochaines étapes:")
        print(f"  1. cp {config_dir / 'company.yaml.example'} {config_dir / 'company.yaml'}")
        print("  2. Modifiez company.yaml (et pricing.yaml au besoin)")
        print("  3. Exécutez: logistix")
    else:
        print("Aucun nouveau fichier créé (tous existaient déjà).")


def _quote(args: list[str]) -> int:
    """Print the invoice breakdown for a liters quantity. Returns an exit code."""
    if len(args) != 1:
        print("Usage: logistix quote <litres>")
        return 2
    try:
        liters = Decimal(args[0].replace(",", "."))
    except InvalidOperation:
        print(f"Erreur: quantité invalide: '{args[0]}'")
        return 2

    from logistix.services.invoice_calculator import round2
    from logistix.services.invoicing import default_calculator
    from logistix.utils.formatters import format_liters, format_money, format_rate

    calculator = default_calculator()
    cfg = calculator.config
    b = calculator.calculate(liters)
    print(f"Quantité:          {format_liters(liters)}")
    print(f"Frais de service:  {format_money(b.service_fee)}")
    print(f"Livraison:         {format_money(round2(b.delivery_cost))}")
    print(f"Sous-total:        {format_money(b.subtotal)}")
    print(f"TPS ({format_rate(cfg.gst_rate)}):".ljust(19) + format_money(b.gst))
    print(f"TVQ ({format_rate(cfg.qst_rate)}):".ljust(19) + format_money(b.qst))
    print(f"TOTAL:             {format_money(b.total)}")
    return 0


def _preflight() -> bool:
    """Verify minimal setup before launching the TUI.

    Auto-creates the data directory. Returns False with a helpful message
    when it cannot be created.
    """
    from logistix.config import get_data_dir

    data_dir = get_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Erreur: impossible de créer le répertoire de données {data_dir}: {e}")
        return False
    return True


def main() -> None:
    """Entry point for the Logistix CLI/TUI."""
    from logistix.config import configure_logging

    configure_logging()

    if len(sys.argv) > 1 and sys.argv[1] == "init":
        _init_config()
        return

    if len(sys.argv) > 1 and sys.argv[1] == "quote":
        code = _quote(sys.argv[2:])
        if code:
            sys.exit(code)
        return

    if not _preflight():
        sys.exit(1)

    from logistix.tui.app import LogistixApp

    app = LogistixApp()
    app.run()


if __name__ == "__main__":
    main()
