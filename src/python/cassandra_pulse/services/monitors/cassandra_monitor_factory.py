import logging
from typing import Optional
from cassandra import ConsistencyLevel, DriverException
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile, NoHostAvailable, Session
from cassandra.policies import WhiteListRoundRobinPolicy
from cassandra.query import PreparedStatement
from injector import inject, singleton
from cassandra_pulse.configs import PulseConfig
from cassandra_pulse.models import Credentials, NodeAddress, Service
from cassandra_pulse.services.monitors.cassandra_cluster_monitor import CassandraClusterMonitor, HostRemovedListener
from cassandra_pulse.services.monitors.cluster_monitor import ClusterMonitor, HostRemovedCallback, MonitorFactory

@singleton
class CassandraMonitorFactory(MonitorFactory):

    @inject
    def __init__(self, pulse_config: PulseConfig):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__probe_config = pulse_config.probe

    def create(self,
               service: Service,
               addresses: frozenset[NodeAddress],
               timeout: float,
               credentials: Optional[Credentials],
               on_host_removed: HostRemovedCallback) -> Optional[ClusterMonitor]:
        """Connect to the cluster through ``addresses``.

        The driver dials every node on ``service.port``; a node advertising
        another port is still probed on the service port. Name resolution,
        socket and driver failures return ``None``.
        """
        hosts = sorted(address.host for address in addresses)
        other_ports = sorted({address.port for address in addresses} - {service.port})
        if other_ports:
            self.__logger.warning(f"{service} lists nodes on ports {other_ports}, they are probed on port {service.port}")

        auth_provider = None
        if credentials is not None:
            auth_provider = PlainTextAuthProvider(username=credentials.username, password=credentials.password)

        cluster: Optional[Cluster] = None
        try:
            profile = ExecutionProfile(
                load_balancing_policy=WhiteListRoundRobinPolicy(hosts),
                consistency_level=ConsistencyLevel.ONE,
                request_timeout=timeout,
            )
            cluster = Cluster(
                contact_points=hosts,
                port=service.port,
                auth_provider=auth_provider,
                connect_timeout=timeout,
                control_connection_timeout=timeout,
                execution_profiles={EXEC_PROFILE_DEFAULT: profile},
            )
            cluster.register_listener(HostRemovedListener(on_host_removed))
            session: Session = cluster.connect()
        except (DriverException, NoHostAvailable, OSError) as exc:
            self.__logger.warning(f"Cannot connect to {service} through {len(hosts)} nodes: {exc}")
            if cluster is not None:
                cluster.shutdown()
            return None

        select_statement, insert_statement = self.__prepare_probes(service, session)
        self.__logger.info(f"Connected to {service} ({len(hosts)} nodes)")
        return CassandraClusterMonitor(
            service=service,
            cluster=cluster,
            session=session,
            select_statement=select_statement,
            insert_statement=insert_statement,
        )

    def __prepare_probes(self,
                         service: Service,
                         session: Session) -> tuple[Optional[PreparedStatement], Optional[PreparedStatement]]:
        keyspace = self.__probe_config.keyspace
        table = self.__probe_config.table
        try:
            session.execute(
                f"CREATE KEYSPACE IF NOT EXISTS {keyspace} WITH replication = "
                f"{{'class': 'SimpleStrategy', 'replication_factor': {self.__probe_config.replication_factor}}}"
            )
            session.execute(f"CREATE TABLE IF NOT EXISTS {keyspace}.{table} (id text PRIMARY KEY, value text)")
            select_statement = session.prepare(f"SELECT value FROM {keyspace}.{table} WHERE id = ?")
            insert_statement = session.prepare(f"INSERT INTO {keyspace}.{table} (id, value) VALUES (?, ?)")
        except (DriverException, NoHostAvailable) as exc:
            # Availability is still reported, only the latency probes are disabled
            self.__logger.warning(f"Cannot prepare probe table {keyspace}.{table} on {service}: {exc}")
            return None, None
        return select_statement, insert_statement
