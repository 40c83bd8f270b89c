import json
import pytest
from pathlib import Path

from airport_fallback.builder import (
    FallbackTableBuilder,
    build_airport,
    build_runway,
    build_table,
    filter_airports,
    index_runways,
    serialize_table,
    write_table,
)
from airport_fallback.errors import FetchError, SizeLimitExceededError
from airport_fallback.models.raw import RawAirport, RawRunway
from airport_fallback.service import AirportFallbackService

from conftest import FIXED_GENERATED, LocalOurAirportsSource


RETAINED = ['CYUL', 'CYYZ', 'CYOW', 'KJFK', 'KIAD', 'KBOS', 'MMMX',
            'EGLL', 'EGKB', 'LEMD', 'LOWS', 'LIMJ']


def make_airport(**kwargs) -> RawAirport:
    values = {
        'ident': 'CYUL',
        'type': 'large_airport',
        'name': 'Montreal / Pierre Elliott Trudeau International Airport',
        'latitude_deg': '45.4706001282',
        'longitude_deg': '-73.7407989502',
        'elevation_ft': '118',
        'iso_country': 'CA',
        'iso_region': 'CA-QC',
        'municipality': 'Montréal',
    }
    values.update(kwargs)
    return RawAirport(**values)


def make_runway(**kwargs) -> RawRunway:
    values = {
        'airport_ident': 'CYUL',
        'length_ft': '11000',
        'width_ft': '200',
        'surface': 'ASP',
        'closed': '0',
        'le_ident': '06L',
        'le_heading_degT': '57.3',
        'he_ident': '24R',
        'he_heading_degT': '237.3',
    }
    values.update(kwargs)
    return RawRunway(**values)


class TestFiltering:

    def test_fixture_airports_retained(self, raw_airports):
        retained = [airport.ident for airport in filter_airports(raw_airports)]
        assert retained == RETAINED

    @pytest.mark.parametrize('overrides', [
        {'iso_country': 'JP'},
        {'iso_country': ''},
        {'type': 'small_airport'},
        {'type': 'heliport'},
        {'type': 'closed'},
        {'ident': 'CA-0123'},
        {'ident': 'EGLLX'},
        {'ident': ''},
    ])
    def test_each_condition_required(self, overrides):
        assert filter_airports([make_airport(**overrides)]) == []

    def test_lowercase_ident_accepted(self):
        assert len(filter_airports([make_airport(ident='cyul')])) == 1


class TestRunwayIndex:

    def test_groups_by_airport(self, raw_runways):
        index = index_runways(raw_runways)

        assert len(index['CYUL']) == 4
        assert len(index['CYYZ']) == 2
        assert 'RJTT' in index
        assert '' not in index

    def test_keeps_source_order(self):
        runways = [make_runway(le_ident='06L'), make_runway(airport_ident='CYYZ'), make_runway(le_ident='10')]
        index = index_runways(runways)
        assert [runway.le_ident for runway in index['CYUL']] == ['06L', '10']


class TestRunwayShaping:

    def test_open_runway(self):
        runway = build_runway(make_runway())
        assert runway.to_dict() == {'i': '06L/24R', 'l': 11000, 'w': 200, 's': 'ASP', 'hd': [57, 237]}

    @pytest.mark.parametrize('closed', ['1', 'true'])
    def test_closed_runway_dropped(self, closed):
        assert build_runway(make_runway(closed=closed)) is None

    @pytest.mark.parametrize('length', ['', '0', '-50', 'unknown'])
    def test_runway_without_length_dropped(self, length):
        assert build_runway(make_runway(length_ft=length)) is None

    def test_defaults_for_bad_values(self):
        runway = build_runway(make_runway(width_ft='', surface='', le_heading_degT='', he_heading_degT='n/a'))
        assert runway.width_ft == 0
        assert runway.surface == 'UNK'
        assert runway.headings == (0, 0)

    def test_fractional_length(self):
        assert build_runway(make_runway(length_ft='8000.9', width_ft='148.5')).length_ft == 8000


class TestAirportShaping:

    def test_compact_record(self):
        compact = build_airport(make_airport(), [make_runway()]).to_dict()

        assert compact == {
            'n': 'Montreal / Pierre Elliott Trudeau International A…',
            'la': 45.4706,
            'lo': -73.7408,
            'el': 118,
            't': 'large',
            'm': 'Montréal',
            'r': 'CA-QC',
            'rw': [{'i': '06L/24R', 'l': 11000, 'w': 200, 's': 'ASP', 'hd': [57, 237]}],
        }

    def test_no_runway_key_without_runways(self):
        compact = build_airport(make_airport(), [make_runway(closed='1')]).to_dict()
        assert 'rw' not in compact

    def test_truncated_fields(self):
        compact = build_airport(make_airport(name='N' * 80, municipality='M' * 40))
        assert len(compact.name) == 50
        assert compact.name.endswith('…')
        assert compact.municipality == 'M' * 29 + '…'

    def test_missing_elevation(self):
        assert build_airport(make_airport(elevation_ft='')).elevation_ft == 0

    def test_medium_type(self):
        assert build_airport(make_airport(type='medium_airport')).type == 'medium'

    def test_missing_coordinates_default_to_zero(self):
        compact = build_airport(make_airport(latitude_deg='', longitude_deg='unknown')).to_dict()
        assert compact['la'] == 0.0
        assert compact['lo'] == 0.0

    def test_missing_coordinates_printable_after_lookup(self):
        table = build_table([make_airport(name='X', latitude_deg='')], [], generated=FIXED_GENERATED)
        airport = AirportFallbackService(table).get_airport_by_icao('CYUL')

        assert airport.lat == 0.0
        assert 'Position: 0.0000, -73.7408' in str(airport)


class TestBuildTable:

    def test_metadata(self, fixture_table):
        meta = fixture_table['meta']
        assert meta['generated'] == '2026-01-15T12:00:00Z'
        assert meta['source'] == 'OurAirports'
        assert meta['sourceUrl'] == 'https://ourairports.com/data/'
        assert meta['count'] == len(fixture_table['airports']) == len(RETAINED)
        assert meta['coverage']['northAmerica'] == 'Canada, USA, Mexico'

    def test_keys_in_source_order(self, fixture_table):
        assert list(fixture_table['airports']) == RETAINED

    def test_fixture_runways(self, fixture_table):
        airports = fixture_table['airports']

        assert airports['CYUL']['rw'] == [
            {'i': '06L/24R', 'l': 11000, 'w': 200, 's': 'ASP', 'hd': [57, 237]},
            {'i': '06R/24L', 'l': 9600, 'w': 200, 's': 'ASP', 'hd': [57, 237]},
            {'i': '10/28', 'l': 7000, 'w': 200, 's': 'ASP', 'hd': [97, 277]},
        ]
        assert airports['CYOW']['rw'][0]['hd'] == [0, 0]
        assert airports['CYOW']['rw'][1]['s'] == 'CON'
        assert [rw['s'] for rw in airports['KJFK']['rw']] == ['CON', 'CON']
        assert [rw['i'] for rw in airports['KBOS']['rw']] == ['04R/22L']
        assert [rw['i'] for rw in airports['LEMD']['rw']] == ['14L/32R']
        assert airports['EGKB']['rw'][1]['s'] == 'TRF'
        assert airports['LOWS']['rw'][1]['s'] == 'UNK'
        assert airports['LIMJ']['rw'][0]['s'] == 'BIT'
        assert airports['LIMJ']['el'] == 0

    def test_every_runway_open_with_length(self, fixture_table, raw_runways):
        closed = {(rw.airport_ident, f"{rw.le_ident}/{rw.he_ident}") for rw in raw_runways if rw.is_closed}
        for icao, airport in fixture_table['airports'].items():
            for runway in airport.get('rw', []):
                assert runway['l'] > 0
                assert (icao, runway['i']) not in closed
                assert all(0 <= heading < 360 for heading in runway['hd'])

    def test_runways_of_filtered_airports_dropped(self, fixture_table):
        assert 'RJTT' not in fixture_table['airports']
        assert 'CSE4' not in fixture_table['airports']

    def test_first_occurrence_wins(self):
        airports = [
            make_airport(name='First'),
            make_airport(name='Second'),
            make_airport(ident='cyul', name='Third'),
        ]
        table = build_table(airports, [], generated=FIXED_GENERATED)

        assert list(table['airports']) == ['CYUL']
        assert table['airports']['CYUL']['n'] == 'First'
        assert table['meta']['count'] == 1

    def test_serialized_form_is_minified(self, fixture_table):
        text = serialize_table(fixture_table)
        assert '": ' not in text
        assert ', "' not in text
        assert '\n' not in text
        assert 'Montréal' in text
        assert json.loads(text) == fixture_table


class TestWriteTable:

    def test_creates_directory(self, tmp_path, fixture_table):
        output = tmp_path / 'src' / 'data' / 'airports-fallback.json'

        size = write_table(fixture_table, output)

        assert output.exists()
        assert size == len(output.read_bytes())
        assert json.loads(output.read_text(encoding='utf-8')) == fixture_table
        assert list(output.parent.iterdir()) == [output]

    def test_size_limit_exceeded(self, tmp_path, fixture_table):
        output = tmp_path / 'data' / 'airports-fallback.json'

        with pytest.raises(SizeLimitExceededError) as excinfo:
            write_table(fixture_table, output, max_size_kb=1)

        assert excinfo.value.limit_bytes == 1024
        assert excinfo.value.size_bytes > 1024
        assert not output.exists()

    def test_size_limit_keeps_previous_output(self, tmp_path, fixture_table):
        output = tmp_path / 'airports-fallback.json'
        output.write_text('{"previous": true}', encoding='utf-8')

        with pytest.raises(SizeLimitExceededError):
            write_table(fixture_table, output, max_size_kb=1)

        assert output.read_text(encoding='utf-8') == '{"previous": true}'
        assert list(tmp_path.iterdir()) == [output]


class TestFallbackTableBuilder:

    def test_generate(self, tmp_path, local_source):
        output = tmp_path / 'out' / 'airports-fallback.json'
        builder = FallbackTableBuilder(local_source, output_file=output)

        result = builder.generate(generated=FIXED_GENERATED)

        assert result.output_file == output
        assert result.count == len(RETAINED)
        assert result.size_bytes == len(output.read_bytes())
        assert result.size_kb < 500
        assert local_source.fetch_count == 2

    def test_generate_uses_cache(self, tmp_path, local_source):
        builder = FallbackTableBuilder(local_source, output_file=tmp_path / 'a.json')
        builder.generate()
        builder.generate()
        assert local_source.fetch_count == 2

    def test_generate_size_failure_writes_nothing(self, tmp_path, local_source):
        output = tmp_path / 'out' / 'airports-fallback.json'
        builder = FallbackTableBuilder(local_source, output_file=output, max_size_kb=1)

        with pytest.raises(SizeLimitExceededError):
            builder.generate()

        assert not output.exists()

    def test_generate_fetch_failure_writes_nothing(self, tmp_path, test_cache_dir, test_csv_dir):
        class FailingSource(LocalOurAirportsSource):
            def fetch_runways(self):
                raise FetchError('https://example.org/runways.csv', status_code=503)

        output = tmp_path / 'airports-fallback.json'
        builder = FallbackTableBuilder(FailingSource(str(test_cache_dir), test_csv_dir), output_file=output)

        with pytest.raises(FetchError):
            builder.generate()

        assert not output.exists()


class TestEndToEnd:
    """Generation followed by lookups on the written file."""

    def test_canadian_airport_with_closed_runway(self, tmp_path, test_cache_dir):
        csv_dir = tmp_path / 'csv'
        csv_dir.mkdir()
        (csv_dir / 'airports_test.csv').write_text(
            '"id","ident","type","name","latitude_deg","longitude_deg","elevation_ft","continent","iso_country","iso_region","municipality"\n'
            '1590,"CYUL","large_airport","Montreal / Pierre Elliott Trudeau International Airport",45.4706001282,-73.7407989502,118,"NA","CA","CA-QC","Montréal"\n',
            encoding='utf-8',
        )
        (csv_dir / 'runways_test.csv').write_text(
            '"id","airport_ref","airport_ident","length_ft","width_ft","surface","lighted","closed","le_ident","le_heading_degT","he_ident","he_heading_degT"\n'
            '1,1590,"CYUL",6000,150,"ASP",0,1,"H1",,"H2",\n'
            '2,1590,"CYUL",11000,200,"ASPH",1,0,"06L",57.3,"24R",237.3\n',
            encoding='utf-8',
        )
        output = tmp_path / 'airports-fallback.json'
        FallbackTableBuilder(LocalOurAirportsSource(str(test_cache_dir), csv_dir), output_file=output).generate()

        table = json.loads(output.read_text(encoding='utf-8'))
        assert list(table['airports']) == ['CYUL']
        assert table['airports']['CYUL']['rw'] == [
            {'i': '06L/24R', 'l': 11000, 'w': 200, 's': 'ASP', 'hd': [57, 237]}
        ]

        service = AirportFallbackService.from_file(output)
        airport = service.get_airport_by_icao('CYUL')
        assert len(airport.runways) == 1
        assert airport.runways[0].low_end.ident == '06L'
        assert airport.runways[0].high_end.heading_true == 237

    def test_golden_cyul(self, tmp_path, local_source):
        output = tmp_path / 'airports-fallback.json'
        FallbackTableBuilder(local_source, output_file=output).generate()

        airport = AirportFallbackService.from_file(output).get_airport_by_icao('CYUL')

        assert 'Montreal' in airport.name
        assert airport.elevation > 0
        assert airport.type == 'large_airport'
        assert airport.region == 'CA-QC'
        assert airport.lat == pytest.approx(45.47, abs=0.01)
        assert airport.lon == pytest.approx(-73.74, abs=0.01)
