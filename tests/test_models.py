from transport.models import DEFAULT_FEE_NAME, FeeItem, RouteLeg, TripParameters


def test_default_trip_has_one_empty_leg_and_nothing_else() -> None:
    trip = TripParameters.default()

    assert len(trip.legs) == 1
    assert trip.legs[0].name == ""
    assert trip.legs[0].id
    assert trip.fees == ()
    assert trip.deadhead_km is None
    assert trip.apply_vat is False
    assert trip.preset_name == ""


def test_from_dict_defaults_every_missing_field() -> None:
    trip = TripParameters.from_dict({})

    assert trip == TripParameters()


def test_from_dict_reads_legacy_camel_case_keys() -> None:
    raw = {
        "presetName": "Volvo FH",
        "prejazdNakladkaKm": 50,
        "legs": [{"id": "a", "name": "Leg 1", "km": 200}],
        "consumption": 30,
        "fuelPrice": "1.50",
        "perDiem": 40,
        "fees": [{"id": "f", "name": "Toll", "amount": 25}],
        "applyVat": True,
        "vatPct": 20,
    }

    trip = TripParameters.from_dict(raw)

    assert trip.preset_name == "Volvo FH"
    assert trip.deadhead_km == 50.0
    assert trip.legs == (RouteLeg(id="a", name="Leg 1", distance_km=200.0),)
    assert trip.consumption_l_per_100km == 30.0
    assert trip.fuel_price_per_liter == 1.5
    assert trip.per_diem_amount == 40.0
    assert trip.fees == (FeeItem(id="f", name="Toll", amount=25.0),)
    assert trip.apply_vat is True
    assert trip.vat_percent == 20.0
    assert trip.work_hours is None


def test_from_dict_repairs_rows() -> None:
    raw = {
        "legs": [
            {"name": "no id", "distance_km": 10},
            "not a row",
            {"id": "dup", "distance_km": 5},
            {"id": "dup", "distance_km": -7},
        ],
        "fees": [{"id": "", "amount": "abc"}],
    }

    trip = TripParameters.from_dict(raw)

    ids = trip.leg_ids()
    assert len(trip.legs) == 3
    assert len(set(ids)) == 3
    assert all(ids)
    assert trip.legs[2].distance_km == 0.0
    assert trip.fees[0].id
    assert trip.fees[0].amount is None


def test_from_dict_clamps_negatives_and_drops_garbage() -> None:
    trip = TripParameters.from_dict({"other_cost": -10, "margin_percent": "ten", "days": None})

    assert trip.other_cost == 0.0
    assert trip.margin_percent is None
    assert trip.days is None


def test_to_dict_from_dict_preserves_trip() -> None:
    trip = TripParameters(
        deadhead_km=12.5,
        legs=(RouteLeg(id="l1", name="A-B", distance_km=310.2),),
        consumption_l_per_100km=28.0,
        hourly_rate=15.0,
        drive_hours=6.5,
        work_hours=1.0,
        per_diem_amount=45.0,
        days=2.0,
        fees=(FeeItem(id="f1", name="Toll", amount=80.0),),
        extra_expenses=5.0,
        margin_percent=12.0,
        apply_vat=True,
        vat_percent=23.0,
        preset_name="Scania",
    )

    assert TripParameters.from_dict(trip.to_dict()) == trip


def test_leg_and_fee_editing_returns_new_values() -> None:
    trip = TripParameters.default()

    added = trip.with_leg_added().with_fee_added()

    assert len(trip.legs) == 1
    assert len(added.legs) == 2
    assert added.legs[1].name == "Leg 2"
    assert added.legs[1].distance_km == 0.0
    assert added.fees[0].name == DEFAULT_FEE_NAME
    assert len(set(added.leg_ids())) == 2

    removed = added.with_leg_removed(added.legs[0].id).with_fee_removed(added.fees[0].id)
    assert removed.legs == (added.legs[1],)
    assert removed.fees == ()


def test_with_values_clamps_numeric_fields() -> None:
    trip = TripParameters().with_values(deadhead_km=-3, margin_percent="15", preset_name="x")

    assert trip.deadhead_km == 0.0
    assert trip.margin_percent == 15.0
    assert trip.preset_name == "x"
