from unittest.mock import patch

from src import cli
from src.models.trip_types import ChargingNetwork, EVRouteResult
from src.routing.directions_client import RouteNotFoundError

BASE_ARGS = ['--origin', 'Fresno, CA', '--destination', 'Sacramento, CA',
             '--range', '250', '--battery', '80', '--log-mode', 'SILENT']


def empty_result():
    return EVRouteResult(total_distance=170.0, total_duration=180.0, driving_duration=180.0,
                         charging_duration=0, charging_stops=[], available_stations=[], legs=[])


class TestBuildParser:

    def test_repeatable_options(self):
        args = cli.build_parser().parse_args(
            BASE_ARGS + ['--waypoint', 'Merced, CA', '--waypoint', 'Modesto, CA',
                         '--network', 'EVgo', '--network', 'Tesla Supercharger'])
        assert args.waypoint == ['Merced, CA', 'Modesto, CA']
        assert args.network == ['EVgo', 'Tesla Supercharger']
        assert args.vehicle_range == 250


@patch('src.cli.get_station_directory')
@patch('src.cli.GoogleDirectionsClient')
@patch('src.cli.EVRoutePlanner')
class TestMain:

    def test_success(self, planner_cls, directions_cls, directory_factory, tmp_path):
        planner_cls.return_value.plan_route.return_value = empty_result()

        code = cli.main(BASE_ARGS + ['--network', 'EVgo', '--config', str(tmp_path / 'none.yaml')])

        assert code == 0
        params = planner_cls.return_value.plan_route.call_args.args[0]
        assert params.preferred_networks == [ChargingNetwork.EVGO]
        assert params.min_battery == 20
        directory_factory.assert_called_once_with('openchargemap', network_fallback=True)

    def test_route_failure_exit_code(self, planner_cls, directions_cls, directory_factory, tmp_path):
        planner_cls.return_value.plan_route.side_effect = RouteNotFoundError("ZERO_RESULTS")
        assert cli.main(BASE_ARGS + ['--config', str(tmp_path / 'none.yaml')]) == 1

    def test_invalid_params_exit_code(self, planner_cls, directions_cls, directory_factory, tmp_path):
        argv = BASE_ARGS + ['--min-battery', '90', '--max-battery', '50',
                            '--config', str(tmp_path / 'none.yaml')]
        assert cli.main(argv) == 2
        planner_cls.assert_not_called()

    def test_export(self, planner_cls, directions_cls, directory_factory, tmp_path):
        planner_cls.return_value.plan_route.return_value = empty_result()
        out_dir = tmp_path / 'out'

        code = cli.main(BASE_ARGS + ['--provider', 'nrel', '--output-dir', str(out_dir),
                                     '--config', str(tmp_path / 'none.yaml')])

        assert code == 0
        assert (out_dir / 'legs.csv').exists()
        assert directory_factory.call_args.args[0] == 'nrel'

    def test_out_of_range_override_exit_code(self, planner_cls, directions_cls, directory_factory,
                                             tmp_path, capsys):
        config = tmp_path / 'bad.yaml'
        config.write_text("planner:\n  safety_buffer: 99\n", encoding="utf-8")

        assert cli.main(BASE_ARGS + ['--config', str(config)]) == 2
        assert "Invalid planner configuration" in capsys.readouterr().err
        planner_cls.assert_not_called()

    def test_unknown_provider_in_overrides_exit_code(self, planner_cls, directions_cls,
                                                     directory_factory, tmp_path):
        config = tmp_path / 'bad.yaml'
        config.write_text("station_provider: chargehub\n", encoding="utf-8")

        assert cli.main(BASE_ARGS + ['--config', str(config)]) == 2
        directory_factory.assert_not_called()

    def test_directory_construction_error_exit_code(self, planner_cls, directions_cls,
                                                    directory_factory, tmp_path):
        directory_factory.side_effect = ValueError("Unknown station provider 'chargehub'")
        assert cli.main(BASE_ARGS + ['--config', str(tmp_path / 'none.yaml')]) == 2
        planner_cls.assert_not_called()

    def test_unparseable_yaml_exit_code(self, planner_cls, directions_cls, directory_factory, tmp_path):
        config = tmp_path / 'bad.yaml'
        config.write_text("planner: [unclosed\n", encoding="utf-8")
        assert cli.main(BASE_ARGS + ['--config', str(config)]) == 2
