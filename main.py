import argparse
import logging
import sys

from lan_simulation.network import Network
from lan_simulation.scenario import BroadcastRequest, PrintRequest
from log_setup import configure_debug, quiet_third_party_loggers
from scenarios.default_requests import DefaultRequestsScenario


def parse_args(argv):
    parser = argparse.ArgumentParser(description='Token ring LAN simulation on the default example ring')
    parser.add_argument('-render', choices=['text', 'html', 'xml'], default=None,
                        help='Render the ring to stdout before running requests')
    parser.add_argument('-print', nargs=3, metavar=('WORKSTATION', 'DOCUMENT', 'PRINTER'), dest='print_job',
                        default=None, help='Request WORKSTATION to print DOCUMENT on PRINTER')
    parser.add_argument('-broadcast', action='store_true', default=False,
                        help='Send a broadcast packet around the ring')
    parser.add_argument('-scenario', default=None,
                        help='Run a named request scenario: default-requests')
    parser.add_argument('-visualize', action='store_true', default=False,
                        help='Save a picture of the ring under results/')
    parser.add_argument('-debug', action='store_true', default=False,
                        help='Log every hop (DEBUG level)')
    return parser.parse_args(argv)


def main(argv, out=None) -> int:
    out = out if out is not None else sys.stdout
    args = parse_args(argv)
    configure_debug(args.debug)
    quiet_third_party_loggers()

    network = Network.default_example()
    logging.info(f"Default example ring: {network}")

    if args.render == 'text':
        out.write(network.to_text() + "\n")
    elif args.render == 'html':
        out.write(network.to_html())
    elif args.render == 'xml':
        out.write(network.to_xml() + "\n")

    results = []
    if args.print_job is not None:
        workstation, document, printer = args.print_job
        if not network.has_workstation(workstation):
            logging.error(f"Unknown workstation '{workstation}'")
            return 2
        results.append(PrintRequest(workstation, document, printer).run(network, out))
    if args.broadcast:
        results.append(BroadcastRequest().run(network, out))
    if args.scenario is not None:
        if args.scenario.lower() != 'default-requests':
            raise ValueError(f"Unknown scenario '{args.scenario}'. Valid options: default-requests")
        results.extend(DefaultRequestsScenario().run(network, out))

    if args.visualize:
        from visualization.visualizer import visualize_ring
        visualize_ring(network)

    stats = network.stats.summary()
    logging.info("Simulation stats: \n" + "\n".join(f"{k}: {v}" for k, v in stats.items()))
    return 0 if all(results) else 1


if __name__ == '__main__':
    raise SystemExit(main(sys.argv[1:]))
